"""Extraction of mappable life events from a GEDCOM record set.

The record set only needs to expose ``individuals()`` and ``families()``.
Individuals carry ``name`` plus ``birth()`` and ``death()``; families carry
``husband``, ``wife`` and ``marriage()``. Each event accessor returns ``None``
or an object with ``place()`` and ``date()``.
"""

import logging

from .constants import BIRTH, DEATH, MARRIAGE, NAME_DELIMITER, UNKNOWN_DATE, UNKNOWN_NAME
from .models import Event

logger = logging.getLogger(__name__)


def clean_name(name: str | None) -> str:
    """Strip GEDCOM surname delimiters from a display name."""
    if not name:
        return UNKNOWN_NAME
    return name.replace(NAME_DELIMITER, "")


def _make_event(event_type: str, name: str, record) -> Event | None:
    """Build an Event from a birth/death/marriage sub-record, if it has a place."""
    if record is None:
        return None
    place = record.place()
    if not place:
        return None
    return Event(
        type=event_type,
        name=name,
        place=place,
        date=record.date() or UNKNOWN_DATE,
    )


def _spouse_name(spouse) -> str:
    if spouse is None:
        return UNKNOWN_NAME
    return clean_name(spouse.name)


def extract_events(gedcom) -> list[Event]:
    """Walk individuals then families and return every event that has a place."""
    events = []

    for indi in gedcom.individuals():
        name = clean_name(indi.name)
        for event_type, accessor in ((BIRTH, indi.birth), (DEATH, indi.death)):
            event = _make_event(event_type, name, accessor())
            if event:
                events.append(event)

    for fam in gedcom.families():
        name = f"{_spouse_name(fam.husband)} & {_spouse_name(fam.wife)}"
        event = _make_event(MARRIAGE, name, fam.marriage())
        if event:
            events.append(event)

    logger.debug(f"Found {len(events)} events with location data")
    return events
