"""Geocoding of extracted events through an injected geocoder.

The geocoder is anything with ``geocode(location) -> GeocodeHit | None``.
Which providers sit behind it, and in what order, is the geocoder's concern;
this module only adds per-run de-duplication and the politeness delay.
"""

import logging
import time
from collections.abc import Callable, Iterable, Mapping

from .constants import OFFLINE_GEOCODER_PREFIX, POLITENESS_DELAY
from .geocache import GeocodeCache
from .models import Coordinates, Event, GeocodedEvent, GeocodeHit

logger = logging.getLogger(__name__)


def as_hit(result) -> GeocodeHit | None:
    """Coerce a geocoder result to a GeocodeHit, or None if it has no position."""
    if not result:
        return None
    if isinstance(result, GeocodeHit):
        hit = result
    elif isinstance(result, Mapping):
        hit = GeocodeHit(
            lat=result.get("lat"),  # type: ignore[arg-type]
            lon=result.get("lon"),  # type: ignore[arg-type]
            geocoder=result.get("geocoder") or "",
        )
    else:
        hit = GeocodeHit(
            lat=getattr(result, "lat", None),  # type: ignore[arg-type]
            lon=getattr(result, "lon", None),  # type: ignore[arg-type]
            geocoder=getattr(result, "geocoder", "") or "",
        )
    if hit.lat is None or hit.lon is None:
        return None
    return GeocodeHit(float(hit.lat), float(hit.lon), hit.geocoder)


def is_offline_hit(hit: GeocodeHit | None) -> bool:
    return hit is not None and hit.geocoder.startswith(OFFLINE_GEOCODER_PREFIX)


class GeocodingResolver:
    """Resolve place strings once per run, pausing between network lookups."""

    def __init__(
        self,
        geocoder,
        cache: GeocodeCache | None = None,
        delay: float = POLITENESS_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.geocoder = geocoder
        self.cache = cache if cache is not None else GeocodeCache()
        self.delay = delay
        self.sleep = sleep

    def _lookup(self, place: str) -> GeocodeHit | None:
        try:
            return as_hit(self.geocoder.geocode(place))
        except Exception as e:
            logger.debug(f"Geocoder raised for '{place}': {e}")
            return None

    def resolve(self, place: str) -> Coordinates | None:
        """Return coordinates for place, consulting the cache first."""
        hits: list[GeocodeHit | None] = []

        def attempt(p: str) -> Coordinates | None:
            hit = self._lookup(p)
            hits.append(hit)
            return hit.coordinates if hit else None

        coords, cached = self.cache.get_or_resolve(place, attempt)
        if cached:
            return coords

        hit = hits[0] if hits else None
        if hit:
            logger.debug(f"Geocoded: {place} ({hit.geocoder or 'unknown geocoder'})")
        else:
            logger.debug(f"Failed to geocode: {place}")

        if not is_offline_hit(hit):
            self.sleep(self.delay)
        return coords

    def resolve_events(self, events: Iterable[Event]) -> list[GeocodedEvent]:
        """Attach coordinates to events, dropping those whose place didn't resolve."""
        geocoded = []
        for event in events:
            coords = self.resolve(event.place)
            if coords is not None:
                geocoded.append(GeocodedEvent.from_event(event, coords))

        logger.debug(f"Successfully geocoded {len(geocoded)} events")
        return geocoded


def resolve_events(
    events: Iterable[Event],
    geocoder,
    cache: GeocodeCache | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> list[GeocodedEvent]:
    """Geocode events with a fresh resolver over the given (or a new) cache."""
    return GeocodingResolver(geocoder, cache=cache, sleep=sleep).resolve_events(events)
