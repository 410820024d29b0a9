"""Date parsing and ordering helpers for display-formatted issue dates.

Issue dates are free-form display strings ("Saturday, April 12, 2025",
"Monday, Jan 1, 2024", "2024-01-02T00:00:00.000Z"). They are parsed with
dateutil; anything it cannot read is treated as unparseable.
"""

from datetime import datetime
from typing import Any, Iterable, TypeVar

from dateutil import parser as date_parser

T = TypeVar("T")

# Two defaults that differ in year, month and day. Text naming a complete
# date parses to the same calendar date under both.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_display_date(value: Any) -> datetime | None:
    """Parse a display or ISO date string.

    Partial values ("May", "10:30", "3rd") are rejected rather than
    completed from the current date. Timezone-aware values are converted to
    local time and returned naive so that every parsed date is comparable.

    Returns:
        The parsed datetime, or None if the value is empty, partial or
        unparseable
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, datetime):
            parsed = value
        else:
            text = str(value).strip()
            if not text:
                return None
            parsed = date_parser.parse(text, default=_DEFAULT_A)
            if parsed.date() != date_parser.parse(text, default=_DEFAULT_B).date():
                return None

        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
    except (ValueError, OverflowError):
        return None
    return parsed


def format_long_date(value: datetime) -> str:
    """Render a date as "Tuesday, January 2, 2024"."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def sort_by_date_desc(items: Iterable[T], date_of=lambda item: item.date) -> list[T]:
    """Sort items by parsed date, most recent first.

    Items whose date cannot be parsed are placed after all dated items,
    in their original relative order.
    """
    dated: list[tuple[datetime, T]] = []
    undated: list[T] = []

    for item in items:
        parsed = parse_display_date(date_of(item))
        if parsed is None:
            undated.append(item)
        else:
            dated.append((parsed, item))

    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in dated] + undated
