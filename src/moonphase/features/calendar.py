# src/moonphase/features/calendar.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from moonphase.core.config import PhaseConfig
from moonphase.core.dates import YearMonth
from moonphase.core.timeutil import days_in_month, format_ymd, utc_midday
from moonphase.features.result import ANONYMOUS, CallerContext, MoonPhaseResult, build_result


@dataclass(frozen=True)
class MoonCalendar:
    month: str
    days_in_month: int
    days: List[MoonPhaseResult]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "daysInMonth": self.days_in_month,
            "days": [d.to_dict() for d in self.days],
        }


def iter_month_dates(ym: YearMonth) -> Iterator[str]:
    """Canonical date strings for day 1..N of the month, ascending."""
    n = days_in_month(ym.year, ym.month)
    for day in range(1, n + 1):
        # each day built on its own at UTC midday (no accumulated timedelta)
        yield format_ymd(utc_midday(ym.year, ym.month, day))


def build_month(
    ym: YearMonth,
    ctx: CallerContext = ANONYMOUS,
    *,
    config: Optional[PhaseConfig] = None,
) -> MoonCalendar:
    days = [build_result(d, ctx, config=config) for d in iter_month_dates(ym)]
    return MoonCalendar(month=str(ym), days_in_month=len(days), days=days)
