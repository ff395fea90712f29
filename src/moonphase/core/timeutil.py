# src/moonphase/core/timeutil.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable

UTC = timezone.utc

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def require_utc(dt: datetime, name: str = "dt") -> datetime:
    """
    Ensure a datetime is timezone-aware and UTC.

    Parameters
    ----------
    dt:
        datetime to validate.
    name:
        Parameter name for error messages.

    Returns
    -------
    datetime
        The same datetime if valid.

    Raises
    ------
    ValueError
        If dt is naive or not UTC.
    """
    if dt.tzinfo is None:
        raise ValueError(f"{name} must be timezone-aware UTC datetime (got naive datetime)")
    off = dt.utcoffset()
    if off is None:
        raise ValueError(f"{name} has invalid tzinfo (utcoffset is None): {dt.tzinfo!r}")
    if off != timedelta(0):
        raise ValueError(f"{name} must be UTC (utcoffset=0). Got: {dt.tzinfo!r}")
    return dt


def utc_midday(year: int, month: int, day: int) -> datetime:
    """12:00:00 UTC on the given day. Raises ValueError for impossible components."""
    return datetime(year, month, day, 12, 0, 0, tzinfo=UTC)


def midday_of(d: date) -> datetime:
    return utc_midday(d.year, d.month, d.day)


def now_utc_from(clock: Clock | None) -> datetime:
    """Read the clock (default: wall clock) and normalize to UTC."""
    now = (clock or utc_now)()
    if now.tzinfo is None:
        raise ValueError("clock must return a timezone-aware datetime")
    return now.astimezone(UTC)


def days_in_month(year: int, month: int) -> int:
    """
    Day-of-month of "day 0 of next month": the first of the following month,
    stepped back one day, is the last day of this month.
    """
    if month == 12:
        # year + 1 may overflow datetime.MAXYEAR
        return 31
    first_next = utc_midday(year, month + 1, 1)
    return (first_next - timedelta(days=1)).day


def format_ymd(dt: date) -> str:
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
