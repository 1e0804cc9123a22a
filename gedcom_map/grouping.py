"""Grouping of geocoded events that share a map position."""

from collections.abc import Iterable

from .constants import COORD_PRECISION
from .models import GeocodedEvent

LocationGroups = dict[str, list[GeocodedEvent]]


def location_key(lat: float, lon: float) -> str:
    """Format coordinates as the canonical "lat,lon" group key."""
    return f"{lat:.{COORD_PRECISION}f},{lon:.{COORD_PRECISION}f}"


def parse_location_key(key: str) -> tuple[float, float]:
    lat, lon = key.split(",")
    return float(lat), float(lon)


def group_by_location(events: Iterable[GeocodedEvent]) -> LocationGroups:
    """Bucket events by rounded coordinates.

    Groups are ordered by first appearance and events keep their input order.
    """
    groups: LocationGroups = {}
    for event in events:
        groups.setdefault(location_key(event.lat, event.lon), []).append(event)
    return groups


def first_location(groups: LocationGroups) -> tuple[float, float] | None:
    """Position of the first group, or None if there are no groups."""
    for key in groups:
        return parse_location_key(key)
    return None


def busiest_location(groups: LocationGroups) -> tuple[float, float]:
    """Position of the group with the most events.

    Ties go to the group seen first. With no groups, (0, 0).
    """
    center = (0.0, 0.0)
    max_events = 0
    for key, events in groups.items():
        if len(events) > max_events:
            max_events = len(events)
            center = parse_location_key(key)
    return center
