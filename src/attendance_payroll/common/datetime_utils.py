from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour HH:MM clock string."""
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month!r}")
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def days_elapsed_in_month(year: int, month: int, today: date) -> int:
    """Days of the month that have started by ``today`` (inclusive).

    A past month counts in full, a month that has not started counts zero.
    """
    first, last = month_bounds(year, month)
    if today < first:
        return 0
    if today > last:
        return last.day
    return today.day
