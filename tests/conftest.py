"""Shared fixtures and fakes for GEDCOM map tests."""

from pathlib import Path

import pytest

from gedcom_map.models import GeocodedEvent, GeocodeHit
from gedcom_map.parsing import EventRecord, Family, GedcomRecordSet, Person

FIXTURES = Path(__file__).parent / "fixtures"

PARIS = (48.8566, 2.3522)
LONDON = (51.5074, -0.1278)
BERLIN = (52.52, 13.405)


def make_person(name, birth=None, death=None, person_id="@I1@"):
    """Build a Person; birth/death are (place, date) tuples."""
    return Person(
        id=person_id,
        name=name,
        birth_record=EventRecord(*birth) if birth else None,
        death_record=EventRecord(*death) if death else None,
    )


def make_family(husband=None, wife=None, marriage=None, family_id="@F1@"):
    return Family(
        id=family_id,
        husband=husband,
        wife=wife,
        marriage_record=EventRecord(*marriage) if marriage else None,
    )


def make_event(event_type="birth", name="John Smith", date="1900", coords=PARIS, place="Paris"):
    return GeocodedEvent(
        type=event_type,
        name=name,
        place=place,
        date=date,
        lat=coords[0],
        lon=coords[1],
    )


class FakeGeocoder:
    """Geocoder capability backed by a dict, recording every call."""

    def __init__(self, places=None, name="nominatim"):
        self.places = places or {}
        self.name = name
        self.calls = []

    def geocode(self, location):
        self.calls.append(location)
        coords = self.places.get(location)
        if coords is None:
            return None
        return GeocodeHit(coords[0], coords[1], self.name)


class RecordingSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sleep():
    """A sleep replacement that records delays instead of waiting."""
    return RecordingSleep()


@pytest.fixture
def sample_gedcom_path():
    return FIXTURES / "sample.ged"


@pytest.fixture
def smith_family():
    """John /Smith/ born in Paris and a marriage at the same coordinates."""
    john = make_person("John /Smith/", birth=("Paris, France", "1900"))
    jane = make_person("Jane /Doe/", person_id="@I2@")
    roe = make_person("John /Roe/", person_id="@I3@")
    family = make_family(husband=jane, wife=roe, marriage=("Paris, Ile-de-France", "1920"))
    return GedcomRecordSet(people=[john, jane, roe], family_list=[family])


@pytest.fixture
def paris_geocoder():
    return FakeGeocoder(
        {
            "Paris, France": PARIS,
            "Paris, Ile-de-France": (48.85660001, 2.35220004),
            "London, England": LONDON,
            "Berlin, Germany": BERLIN,
        }
    )
