"""Date parsing for Sabre timestamps."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Final

_SABRE_DATE_RE: Final = re.compile(r"^(\d{1,2})([A-Z]{3})(\d{2}|\d{4})?$", re.IGNORECASE)
_MONTHS: Final[tuple[str, ...]] = (
    "JAN",
    "FEB",
    "MAR",
    "APR",
    "MAY",
    "JUN",
    "JUL",
    "AUG",
    "SEP",
    "OCT",
    "NOV",
    "DEC",
)
_SECONDS_PER_DAY: Final[int] = 86_400


def parse_datetime(value: str | None, *, default_year: int | None = None) -> datetime | None:
    """Parse ISO-8601 timestamps and Sabre ``01JAN`` / ``01JAN25`` dates."""

    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    match = _SABRE_DATE_RE.match(text)
    if match is None:
        return None
    day, month_name, year_text = match.groups()
    month = _MONTHS.index(month_name.upper()) + 1 if month_name.upper() in _MONTHS else None
    if month is None:
        return None
    if year_text is None:
        year = default_year or datetime.now().year  # noqa: DTZ005
    elif len(year_text) == 2:
        year = 2000 + int(year_text)
    else:
        year = int(year_text)
    try:
        return datetime(year, month, int(day))  # noqa: DTZ001
    except ValueError:
        return None


def parse_date(value: str | None) -> date | None:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def _seconds_between(start: datetime, end: datetime) -> float:
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)
    return (end - start).total_seconds()


def minutes_between(start: datetime | None, end: datetime | None) -> int | None:
    if start is None or end is None:
        return None
    return round(_seconds_between(start, end) / 60)


def rounded_days_between(start: datetime | None, end: datetime | None) -> int | None:
    if start is None or end is None:
        return None
    return round(_seconds_between(start, end) / _SECONDS_PER_DAY)


def ceil_days_between(start: datetime | None, end: datetime | None) -> int | None:
    if start is None or end is None:
        return None
    return math.ceil(_seconds_between(start, end) / _SECONDS_PER_DAY)
