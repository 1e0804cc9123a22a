"""Popup HTML for a map marker that groups events at one location."""

import html
import re
from collections.abc import Sequence

from .constants import (
    DEATH,
    EVENT_COLORS,
    EVENT_TYPES,
    SCROLL_MAX_HEIGHT,
    SCROLL_THRESHOLD,
    SECTION_TITLES,
)
from .models import GeocodedEvent

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

# Optional day, optional month, then year: "12 JAN 1900", "JAN 1900", "1900"
_DATE_RE = re.compile(
    r"(?:(?P<day>\d{1,2})\s+)?(?:(?P<month>[A-Z]{3})[A-Z]*\.?\s+)?(?P<year>\d{3,4})\b",
    re.IGNORECASE,
)


def is_unknown_date(date: str) -> bool:
    return date.strip().lower().startswith("unknown")


def date_sort_key(date: str) -> tuple[int, int, int] | None:
    """Chronological key for a GEDCOM date string, or None if it has no year.

    Qualifiers (ABT, BEF, AFT, EST, ...) are ignored and ranges sort by their
    first date.
    """
    if not date or is_unknown_date(date):
        return None
    match = _DATE_RE.search(date)
    if not match:
        return None
    year = int(match.group("year"))
    month = MONTHS.get((match.group("month") or "").upper()[:3], 0)
    day = int(match.group("day")) if match.group("day") and month else 0
    return (year, month, day)


def sort_by_date(events: Sequence[GeocodedEvent]) -> list[GeocodedEvent]:
    """Sort events chronologically, leaving undated events where they are.

    Events without a usable date keep their positions; the dated events are
    sorted (stably) into the remaining slots.
    """
    keys = [date_sort_key(e.date) for e in events]
    order = sorted((key, i) for i, key in enumerate(keys) if key is not None)
    dated = iter([events[i] for _, i in order])
    return [event if key is None else next(dated) for event, key in zip(events, keys)]


def _event_line(event: GeocodedEvent) -> str:
    color = EVENT_COLORS[event.type]
    return (
        f'<span style="color: {color}; font-size: 20px;">&#9679;</span> '
        f"{html.escape(event.name)} ({html.escape(event.date)})<br>"
    )


def compose_popup(events: Sequence[GeocodedEvent]) -> str:
    """Build the popup for one location group.

    The place name (from the first event) is the heading, followed by
    Births, Marriages and Deaths sections for whichever types are present.
    More than SCROLL_THRESHOLD events are wrapped in a scrolling div.
    """
    if not events:
        return ""

    parts = [f"<b>{html.escape(events[0].place)}</b><br><br>"]

    scroll = len(events) > SCROLL_THRESHOLD
    if scroll:
        parts.append(f'<div style="max-height: {SCROLL_MAX_HEIGHT}; overflow-y: auto;">')

    by_type: dict[str, list[GeocodedEvent]] = {}
    for event in events:
        by_type.setdefault(event.type, []).append(event)

    for event_type in EVENT_TYPES:
        bucket = by_type.get(event_type)
        if not bucket:
            continue
        parts.append(f"<b>{SECTION_TITLES[event_type]}:</b><br>")
        parts.extend(_event_line(e) for e in sort_by_date(bucket))
        if event_type != DEATH:
            parts.append("<br>")

    if scroll:
        parts.append("</div>")

    return "".join(parts)

