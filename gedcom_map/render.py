"""End-to-end map rendering: events -> coordinates -> groups -> popups -> map."""

import logging
import sys
import time
from collections.abc import Callable
from contextlib import contextmanager

from .constants import GOOGLE_KEY_LENGTH, GOOGLE_KEY_PATTERN, GOOGLE_ZOOM
from .events import extract_events
from .exceptions import ConfigurationError
from .geocache import GeocodeCache
from .geocoding import GeocodingResolver
from .grouping import (
    LocationGroups,
    busiest_location,
    first_location,
    group_by_location,
    parse_location_key,
)
from .popup import compose_popup
from .renderers import GoogleMapRenderer, OsmMapRenderer
from .telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

EMPTY_RESULT = ("", "")


def is_valid_google_key(key) -> bool:
    """Check a Google Maps API key looks like AIza + 35 URL-safe characters."""
    return (
        isinstance(key, str)
        and len(key) == GOOGLE_KEY_LENGTH
        and GOOGLE_KEY_PATTERN.match(key) is not None
    )


def _validate(gedcom, geocoder, google_key) -> None:
    if gedcom is None:
        raise ConfigurationError("gedcom is required")
    for method in ("individuals", "families"):
        if not callable(getattr(gedcom, method, None)):
            raise ConfigurationError(f"gedcom must provide {method}()")
    if geocoder is None or not callable(getattr(geocoder, "geocode", None)):
        raise ConfigurationError("geocoder must provide geocode()")
    if google_key and not is_valid_google_key(google_key):
        raise ConfigurationError(
            f"google_key must be {GOOGLE_KEY_LENGTH} characters: 'AIza' followed by "
            "35 letters, digits, '-' or '_'"
        )


@contextmanager
def _debug_logging(enabled: bool):
    """Temporarily lower the package log level to DEBUG.

    If logging hasn't been configured, a stderr handler is attached for the
    duration so the progress messages are still shown.
    """
    package_logger = logging.getLogger(__package__)
    previous = package_logger.level
    handler = None
    if enabled:
        package_logger.setLevel(logging.DEBUG)
        if not package_logger.hasHandlers():
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter("%(message)s"))
            package_logger.addHandler(handler)
    try:
        yield
    finally:
        if handler is not None:
            package_logger.removeHandler(handler)
        package_logger.setLevel(previous)


def build_google_map(groups: LocationGroups, key: str) -> GoogleMapRenderer:
    renderer = GoogleMapRenderer(key)
    for loc_key, events in groups.items():
        renderer.add_marker(parse_location_key(loc_key), compose_popup(events))

    center = first_location(groups)
    if center is not None:
        renderer.center(center)
        renderer.zoom(GOOGLE_ZOOM)
    return renderer


def build_osm_map(groups: LocationGroups) -> OsmMapRenderer:
    renderer = OsmMapRenderer()
    for loc_key, events in groups.items():
        renderer.add_marker(parse_location_key(loc_key), compose_popup(events))

    renderer.center(busiest_location(groups))
    return renderer


def onload_render(
    gedcom,
    geocoder,
    google_key: str | None = None,
    debug: bool = False,
    *,
    cache: GeocodeCache | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> tuple[str, str]:
    """Render a map of the births, marriages and deaths in a GEDCOM record set.

    Args:
        gedcom: Record set exposing individuals() and families()
        geocoder: Object with geocode(location) returning a GeocodeHit or None
        google_key: Google Maps API key; without one, OpenStreetMap is used
        debug: Log progress at DEBUG level
        cache: Place cache to consult and fill (a fresh one by default)
        sleep: Used for the pause after each non-offline geocode

    Returns:
        (head, body) HTML fragments, or ("", "") if nothing could be geocoded.

    Raises:
        ConfigurationError: If an input is missing or the key is malformed.
    """
    _validate(gedcom, geocoder, google_key)

    with _debug_logging(debug):
        with tracer.start_as_current_span("extract_events"):
            logger.debug("Parsing GEDCOM records...")
            events = extract_events(gedcom)

        with tracer.start_as_current_span("resolve_events") as span:
            logger.debug("Geocoding locations...")
            resolver = GeocodingResolver(geocoder, cache=cache, sleep=sleep)
            geocoded = resolver.resolve_events(events)
            span.set_attribute("gedcom_map.events", len(events))
            span.set_attribute("gedcom_map.geocoded", len(geocoded))

        if not geocoded:
            logger.info("No events could be geocoded")
            return EMPTY_RESULT

        with tracer.start_as_current_span("render_map"):
            logger.debug("Generating map...")
            groups = group_by_location(geocoded)
            if google_key:
                renderer = build_google_map(groups, google_key)
            else:
                renderer = build_osm_map(groups)
            return renderer.render()
