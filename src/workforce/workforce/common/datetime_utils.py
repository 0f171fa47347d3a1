from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current server time, timezone-aware UTC.

    Note: Wrapped so tests can inject a fixed clock.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC (that is how they are stored)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_local(value: datetime, offset_minutes: int) -> datetime:
    """Shift a timestamp into the organization's fixed-offset local time."""
    return as_utc(value).astimezone(timezone(timedelta(minutes=offset_minutes)))


def local_work_date(value: datetime, offset_minutes: int) -> date:
    """Calendar day of `value` in the organization's local time.

    The day key is taken once at check-in; a session spanning local midnight
    stays on the day it started.
    """
    return to_local(value, offset_minutes).date()


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (floored, may be negative on clock skew)."""
    return int((as_utc(end) - as_utc(start)).total_seconds() // 60)


def minutes_to_hours(minutes: int) -> float:
    return round(minutes / 60, 2)


def format_minutes(minutes: int) -> str:
    minutes = max(int(minutes), 0)
    return f"{minutes // 60}h {minutes % 60}m"


def month_bounds(month: int, year: int) -> tuple[date, date]:
    start = date(year, month, 1)
    if month == 12:
        end = date(year, 12, 31)
    else:
        end = date(year, month + 1, 1) - timedelta(days=1)
    return start, end


def iter_days(start: date, end: date):
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)
