"""Place-name to coordinates cache.

Keys are the exact place strings from the GEDCOM (no normalization), values
are Coordinates or None for a place that could not be geocoded. The cache can
be saved to and loaded from a JSON file; only successful lookups are written,
so places that failed in one run are tried again in the next.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from pathlib import Path

from .models import Coordinates

logger = logging.getLogger(__name__)

CACHE_FILENAME = "geocode_cache.json"
CACHE_VERSION = 1


class GeocodeCache:
    def __init__(self, entries: dict[str, Coordinates | None] | None = None):
        self._entries: dict[str, Coordinates | None] = dict(entries or {})
        self._lock = threading.RLock()

    def __contains__(self, place: object) -> bool:
        with self._lock:
            return place in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, place: str) -> Coordinates | None:
        """Return the cached result for place (None if failed or absent)."""
        with self._lock:
            return self._entries.get(place)

    def store(self, place: str, coords: Coordinates | None) -> None:
        with self._lock:
            self._entries[place] = coords

    def get_or_resolve(
        self,
        place: str,
        resolve: Callable[[str], Coordinates | None],
    ) -> tuple[Coordinates | None, bool]:
        """Return (result, was_cached), calling resolve at most once per place.

        The check and the store happen under one lock so concurrent callers
        never resolve the same place twice.
        """
        with self._lock:
            if place in self._entries:
                return self._entries[place], True
            coords = resolve(place)
            self._entries[place] = coords
            return coords, False

    def successes(self) -> dict[str, Coordinates]:
        with self._lock:
            return {k: v for k, v in self._entries.items() if v is not None}

    def failures(self) -> list[str]:
        with self._lock:
            return [k for k, v in self._entries.items() if v is None]

    @classmethod
    def load(cls, path: Path) -> GeocodeCache:
        """Load a cache from disk. Missing or corrupt files give an empty cache."""
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)

            if data.get("version") != CACHE_VERSION:
                logger.info(f"Ignoring geocode cache with unknown version: {path}")
                return cls()

            entries = {
                place: Coordinates(float(value["lat"]), float(value["lon"]))
                for place, value in data.get("places", {}).items()
            }
            logger.info(f"Loaded {len(entries)} geocoded places from {path}")
            return cls(entries)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to load geocode cache {path}: {e}")
            return cls()

    def save(self, path: Path) -> None:
        """Persist successful lookups to disk as JSON."""
        places = {place: coords.to_dict() for place, coords in self.successes().items()}
        data = {"version": CACHE_VERSION, "places": places}

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=1, sort_keys=True)
        logger.info(f"Saved geocode cache with {len(places)} places to {path}")
