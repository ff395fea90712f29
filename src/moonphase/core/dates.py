# src/moonphase/core/dates.py
from __future__ import annotations

"""
Caller input -> canonical UTC calendar date / year-month.

Everything here is pure except the "no input" branch, which reads the clock.
Failures raise DateParseError with a stable kind and the exact client message.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from .timeutil import Clock, format_ymd, now_utc_from, utc_midday

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
MONTH_RE = re.compile(r"\d{4}-\d{2}", re.ASCII)

MSG_DATE_FORMAT = "Invalid date format. Use YYYY-MM-DD."
MSG_DATE_INVALID = "Invalid date."
MSG_MONTH_FORMAT = "Invalid month format. Use YYYY-MM."
MSG_MONTH_INVALID = "Invalid month."


class ParseErrorKind(str, Enum):
    MALFORMED_FORMAT = "MALFORMED_FORMAT"
    INVALID_CALENDAR_DATE = "INVALID_CALENDAR_DATE"


class DateParseError(ValueError):
    def __init__(self, kind: ParseErrorKind, message: str, value: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.value = value


@dataclass(frozen=True)
class YearMonth:
    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def parse_date_param(value: Optional[str], *, clock: Clock | None = None) -> datetime:
    """
    Parse ``YYYY-MM-DD`` into a UTC-midday datetime.

    None or "" means "today" (UTC) according to ``clock``.
    """
    if not value:
        now = now_utc_from(clock)
        return utc_midday(now.year, now.month, now.day)

    if not DATE_RE.fullmatch(value):
        raise DateParseError(ParseErrorKind.MALFORMED_FORMAT, MSG_DATE_FORMAT, value)

    y, m, d = (int(x) for x in value.split("-"))
    try:
        dt = utc_midday(y, m, d)
    except ValueError as e:
        raise DateParseError(ParseErrorKind.INVALID_CALENDAR_DATE, MSG_DATE_INVALID, value) from e

    # round-trip guard: the built date must reproduce the requested components
    if (dt.year, dt.month, dt.day) != (y, m, d):
        raise DateParseError(ParseErrorKind.INVALID_CALENDAR_DATE, MSG_DATE_INVALID, value)
    return dt


def normalize_date_param(value: Optional[str], *, clock: Clock | None = None) -> str:
    """Canonical ``YYYY-MM-DD`` string for a caller-supplied (or absent) date."""
    return format_ymd(parse_date_param(value, clock=clock))


def current_month(clock: Clock | None = None) -> YearMonth:
    now = now_utc_from(clock)
    return YearMonth(now.year, now.month)


def parse_month_param(value: Optional[str], *, clock: Clock | None = None) -> YearMonth:
    """Parse ``YYYY-MM``; None means the current UTC month; "" is malformed."""
    if value is None:
        return current_month(clock)

    if not MONTH_RE.fullmatch(value):
        raise DateParseError(ParseErrorKind.MALFORMED_FORMAT, MSG_MONTH_FORMAT, value)

    y, m = _split_month(value)
    try:
        utc_midday(y, m, 1)
    except ValueError as e:
        raise DateParseError(ParseErrorKind.INVALID_CALENDAR_DATE, MSG_MONTH_INVALID, value) from e
    return YearMonth(y, m)


def _split_month(value: str) -> Tuple[int, int]:
    y, m = value.split("-")
    return int(y), int(m)
