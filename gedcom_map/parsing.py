"""GEDCOM file loading into a record set with individuals() and families()."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ged4py import GedcomReader

logger = logging.getLogger(__name__)


@dataclass
class EventRecord:
    """A BIRT/DEAT/MARR sub-record."""

    place_value: str | None = None
    date_value: str | None = None

    def place(self) -> str | None:
        return self.place_value

    def date(self) -> str | None:
        return self.date_value


@dataclass
class Person:
    id: str
    name: str | None = None
    birth_record: EventRecord | None = None
    death_record: EventRecord | None = None

    def birth(self) -> EventRecord | None:
        return self.birth_record

    def death(self) -> EventRecord | None:
        return self.death_record


@dataclass
class Family:
    id: str
    husband: Person | None = None
    wife: Person | None = None
    marriage_record: EventRecord | None = None

    def marriage(self) -> EventRecord | None:
        return self.marriage_record


@dataclass
class GedcomRecordSet:
    """Individuals and families in file order."""

    people: list[Person] = field(default_factory=list)
    family_list: list[Family] = field(default_factory=list)

    def individuals(self) -> list[Person]:
        return self.people

    def families(self) -> list[Family]:
        return self.family_list


def normalize_id(ref) -> str | None:
    """Normalize a GEDCOM reference to a consistent ID string with @ symbols."""
    if ref is None:
        return None
    if hasattr(ref, "xref_id"):
        return ref.xref_id
    stripped = str(ref).strip("@")
    return f"@{stripped}@" if stripped else None


def parse_name(record) -> str | None:
    """Return the NAME value of a ged4py record, as close to the raw form as possible."""
    try:
        name_rec = record.sub_tag("NAME")
    except (AttributeError, KeyError):
        return None
    if not name_rec or not name_rec.value:
        return None
    value = name_rec.value
    # ged4py splits names into (given, surname, suffix)
    if isinstance(value, tuple):
        return " ".join(part for part in value if part) or None
    return str(value)


def parse_event(record, event_tag: str) -> EventRecord | None:
    """Get the date and place of an event sub-record, if the record has one."""
    try:
        event = record.sub_tag(event_tag)
        if not event:
            return None
        date_sub = event.sub_tag("DATE")
        place_sub = event.sub_tag("PLAC")
    except (AttributeError, KeyError):
        return None
    return EventRecord(
        place_value=str(place_sub.value) if place_sub and place_sub.value else None,
        date_value=str(date_sub.value) if date_sub and date_sub.value else None,
    )


def load_gedcom(path: Path) -> GedcomRecordSet:
    """Parse a GEDCOM file into a GedcomRecordSet."""
    if not path.exists():
        raise FileNotFoundError(f"GEDCOM file not found: {path}")

    record_set = GedcomRecordSet()
    people_by_id: dict[str, Person] = {}

    with GedcomReader(str(path)) as reader:
        for record in reader.records0("INDI"):
            person = Person(
                id=record.xref_id,
                name=parse_name(record),
                birth_record=parse_event(record, "BIRT"),
                death_record=parse_event(record, "DEAT"),
            )
            record_set.people.append(person)
            people_by_id[person.id] = person

        for record in reader.records0("FAM"):
            # sub_tag follows the pointer to the spouse record
            husb_id = normalize_id(record.sub_tag("HUSB"))
            wife_id = normalize_id(record.sub_tag("WIFE"))

            record_set.family_list.append(
                Family(
                    id=record.xref_id,
                    husband=people_by_id.get(husb_id) if husb_id else None,
                    wife=people_by_id.get(wife_id) if wife_id else None,
                    marriage_record=parse_event(record, "MARR"),
                )
            )

    logger.info(
        f"Loaded {len(record_set.people)} individuals and "
        f"{len(record_set.family_list)} families from {path}"
    )
    return record_set
