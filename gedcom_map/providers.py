"""Geocoder tiers for resolving GEDCOM place names.

Tiers, cheapest first:
1. Persistent cache - places geocoded by earlier runs
2. geonamescache - bundled database of ~25K cities
3. Nominatim (OpenStreetMap) - best coverage, rate limited to 1 req/sec

Tiers whose name starts with "offline" never touch the network, so callers
can skip their politeness delay for those hits.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from pathlib import Path

import geonamescache
import requests
from rapidfuzz import fuzz, process

from .constants import COUNTRY_ALIASES, UNGEOCODABLE_PLACES
from .geocache import GeocodeCache
from .models import GeocodeHit

logger = logging.getLogger(__name__)


def is_ungeocodable(place: str) -> bool:
    """Check if a place is inherently un-geocodable."""
    return place.lower().strip() in UNGEOCODABLE_PLACES


def parse_place_components(place: str) -> list[str]:
    """Split a place into components (typically: city, county, state, country)."""
    return [c.strip() for c in place.split(",") if c.strip()]


class PersistentCacheGeocoder:
    """Answer from places resolved and saved by previous runs."""

    name = "offline.cache"

    def __init__(self, cache: GeocodeCache):
        self.cache = cache

    @classmethod
    def from_file(cls, path: Path) -> PersistentCacheGeocoder:
        return cls(GeocodeCache.load(path))

    def geocode(self, location: str) -> GeocodeHit | None:
        coords = self.cache.get(location)
        if coords is None:
            return None
        return GeocodeHit(coords.lat, coords.lon, self.name)


class GeonamesGeocoder:
    """Match the first place component against geonamescache city names.

    When the place has more than one component, the last one must name a
    country (or a US state) and only cities in that country are considered.
    Places whose country can't be recognised fall through to later tiers.
    """

    name = "offline.geonamescache"

    def __init__(self, score_cutoff: int = 85):
        self.score_cutoff = score_cutoff
        # lowercase city name -> [(population, country code, coords)]
        self._cities: dict[str, list[tuple[int, str, tuple[float, float]]]] | None = None
        self._country_codes: dict[str, str] | None = None
        self._names_by_country: dict[str, list[str]] = {}

    def _load(self) -> None:
        if self._cities is not None:
            return
        gc = geonamescache.GeonamesCache()

        cities: dict[str, list[tuple[int, str, tuple[float, float]]]] = {}
        for city in gc.get_cities().values():
            cities.setdefault(city["name"].lower(), []).append(
                (
                    city.get("population", 0) or 0,
                    city["countrycode"],
                    (city["latitude"], city["longitude"]),
                )
            )

        codes: dict[str, str] = {}
        for iso, country in gc.get_countries().items():
            codes[country["name"].lower()] = iso
            if country.get("iso3"):
                codes[country["iso3"].lower()] = iso
        for state in gc.get_us_states().values():
            codes[state["name"].lower()] = "US"
        codes.update(COUNTRY_ALIASES)

        self._country_codes = codes
        self._cities = cities

    def country_code(self, location: str) -> str | None:
        """ISO country code named by the last component of a place, if any."""
        components = parse_place_components(location)
        if len(components) < 2:
            return None
        self._load()
        return self._country_codes.get(components[-1].lower())  # type: ignore[union-attr]

    def _city_names(self, country: str | None) -> list[str]:
        if country is None:
            return list(self._cities)  # type: ignore[arg-type]
        if country not in self._names_by_country:
            self._names_by_country[country] = [
                name
                for name, candidates in self._cities.items()  # type: ignore[union-attr]
                if any(code == country for _, code, _ in candidates)
            ]
        return self._names_by_country[country]

    @staticmethod
    def _most_populous(candidates, country: str | None) -> tuple[float, float] | None:
        matching = [c for c in candidates if country is None or c[1] == country]
        if not matching:
            return None
        return max(matching, key=lambda c: c[0])[2]

    def geocode(self, location: str) -> GeocodeHit | None:
        components = parse_place_components(location)
        if not components:
            return None

        self._load()
        country = None
        if len(components) > 1:
            country = self.country_code(location)
            if country is None:
                logger.debug(f"No known country in '{location}', skipping geonamescache")
                return None

        city_name = components[0].lower()
        candidates = self._cities.get(city_name, [])  # type: ignore[union-attr]
        coords = self._most_populous(candidates, country)
        if coords is None:
            match = process.extractOne(
                city_name,
                self._city_names(country),
                scorer=fuzz.ratio,
                score_cutoff=self.score_cutoff,
            )
            if match is None:
                return None
            coords = self._most_populous(self._cities[match[0]], country)  # type: ignore[index]
            if coords is None:
                return None

        return GeocodeHit(float(coords[0]), float(coords[1]), self.name)


class NominatimGeocoder:
    """Geocode using the OpenStreetMap Nominatim search API."""

    name = "nominatim"
    URL = "https://nominatim.openstreetmap.org/search"

    def __init__(self, user_agent: str, min_interval: float = 1.0, timeout: float = 10):
        self.user_agent = user_agent
        self.min_interval = min_interval
        self.timeout = timeout
        self._last_request = 0.0
        self._lock = threading.Lock()

    def _wait_for_slot(self) -> None:
        with self._lock:
            elapsed = time.monotonic() - self._last_request
            if elapsed < self.min_interval:
                time.sleep(self.min_interval - elapsed)
            self._last_request = time.monotonic()

    def geocode(self, location: str) -> GeocodeHit | None:
        self._wait_for_slot()

        try:
            response = requests.get(
                self.URL,
                params={"q": location, "format": "json", "limit": 1},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.debug(f"Nominatim geocoding failed for '{location}': {e}")
            return None

        if not data:
            return None
        try:
            return GeocodeHit(float(data[0]["lat"]), float(data[0]["lon"]), self.name)
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Unexpected Nominatim response for '{location}': {e}")
            return None


class TieredGeocoder:
    """Try each tier in order and return the first hit.

    Hits from tiers other than the persistent cache are recorded in ``store``
    so they can be saved for the next run.
    """

    def __init__(self, tiers: Sequence, store: GeocodeCache | None = None):
        self.tiers = list(tiers)
        self.store = store

    def geocode(self, location: str) -> GeocodeHit | None:
        if is_ungeocodable(location):
            logger.debug(f"Skipping un-geocodable place: '{location}'")
            return None

        for tier in self.tiers:
            try:
                hit = tier.geocode(location)
            except Exception as e:
                logger.warning(f"Geocoder {getattr(tier, 'name', tier)!r} failed: {e}")
                continue
            if hit is None:
                continue
            if self.store is not None and not isinstance(tier, PersistentCacheGeocoder):
                self.store.store(location, hit.coordinates)
            return hit

        return None


def build_geocoder(
    cache_path: Path | None = None,
    user_agent: str = "gedcom-map/0.1",
    network: bool = True,
) -> TieredGeocoder:
    """Build the standard tier chain, backed by a cache file if given."""
    tiers: list = []
    store = None
    if cache_path is not None:
        store = GeocodeCache.load(cache_path)
        tiers.append(PersistentCacheGeocoder(store))
    tiers.append(GeonamesGeocoder())
    if network:
        tiers.append(NominatimGeocoder(user_agent))
    return TieredGeocoder(tiers, store=store)
