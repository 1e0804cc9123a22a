"""GEDCOM Map - plot births, marriages and deaths from a family tree.

Events are pulled from a GEDCOM record set, geocoded once per distinct place,
grouped by position and rendered as an OpenStreetMap (folium) or Google Maps
map with a popup per location.

Usage:
    gedcom-map --gedcom-file /path/to/tree.ged -o map.html
    GEDCOM_FILE=/path/to/tree.ged python -m gedcom_map
"""

from .exceptions import ConfigurationError
from .geocache import GeocodeCache
from .geocoding import GeocodingResolver, resolve_events
from .models import Coordinates, Event, GeocodedEvent, GeocodeHit
from .render import onload_render

__all__ = [
    "ConfigurationError",
    "Coordinates",
    "Event",
    "GeocodeCache",
    "GeocodeHit",
    "GeocodedEvent",
    "GeocodingResolver",
    "onload_render",
    "resolve_events",
]
