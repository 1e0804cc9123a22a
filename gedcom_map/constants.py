"""Constants for event extraction, geocoding and map rendering."""

import re

# Event types, in popup section order
BIRTH = "birth"
MARRIAGE = "marriage"
DEATH = "death"
EVENT_TYPES = [BIRTH, MARRIAGE, DEATH]

SECTION_TITLES = {
    BIRTH: "Births",
    MARRIAGE: "Marriages",
    DEATH: "Deaths",
}

EVENT_COLORS = {
    BIRTH: "green",
    MARRIAGE: "blue",
    DEATH: "red",
}

UNKNOWN_DATE = "Unknown date"
UNKNOWN_NAME = "Unknown"

# GEDCOM surround surnames with slashes: "John /Smith/"
NAME_DELIMITER = "/"

# Popups with more events than this get a scrolling container
SCROLL_THRESHOLD = 5
SCROLL_MAX_HEIGHT = "300px"

# ~0.1m precision
COORD_PRECISION = 6

# Geocoders whose name starts with this prefix don't hit the network
OFFLINE_GEOCODER_PREFIX = "offline"
POLITENESS_DELAY = 1.0

GOOGLE_KEY_LENGTH = 39
GOOGLE_KEY_PATTERN = re.compile(r"^AIza[0-9A-Za-z_-]{35}$")

GOOGLE_ZOOM = 4
OSM_ZOOM = 12

# Places that no geocoder will ever resolve
UNGEOCODABLE_PLACES = {
    "at sea",
    "on ship",
    "in transit",
    "unknown",
    "?",
    "",
    "n/a",
    "na",
    "none",
}

# Country names used in GEDCOM places that geonamescache doesn't list
COUNTRY_ALIASES = {
    "england": "GB",
    "scotland": "GB",
    "wales": "GB",
    "northern ireland": "GB",
    "great britain": "GB",
    "uk": "GB",
    "usa": "US",
    "us": "US",
    "united states of america": "US",
    "america": "US",
}
