"""Data models for mappable life events."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Event:
    type: str  # birth, marriage, death
    name: str
    place: str
    date: str


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class GeocodedEvent:
    """An Event whose place resolved to coordinates."""

    type: str
    name: str
    place: str
    date: str
    lat: float
    lon: float

    @classmethod
    def from_event(cls, event: Event, coords: Coordinates) -> "GeocodedEvent":
        return cls(
            type=event.type,
            name=event.name,
            place=event.place,
            date=event.date,
            lat=coords.lat,
            lon=coords.lon,
        )


@dataclass(frozen=True)
class GeocodeHit:
    """What a geocoder capability returns for a place it could resolve."""

    lat: float
    lon: float
    geocoder: str = ""

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.lat, self.lon)
