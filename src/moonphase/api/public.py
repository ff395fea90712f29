from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from moonphase.core.config import service_config
from moonphase.core.dates import normalize_date_param, parse_month_param
from moonphase.core.phase import PhaseName, Source
from moonphase.core.timeutil import Clock, format_ymd, now_utc_from, utc_now
from moonphase.features.calendar import build_month
from moonphase.features.result import CallerContext, build_result

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("moonphase.api.public")


# ============================================================
# Response Models
# ============================================================
class PhaseResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(description="YYYY-MM-DD")
    phase: PhaseName
    phase_index: int = Field(alias="phaseIndex", ge=0, le=7)
    illumination: float = Field(ge=0.0, le=1.0, description="lit fraction, 3 decimals")
    emoji: str
    source: Source = Field(description="dummy = known-date table, approx = computed")
    attribution: Optional[str] = None
    plan_hint: Optional[str] = Field(default=None, alias="planHint")


class CalendarResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    month: str = Field(description="YYYY-MM")
    days_in_month: int = Field(alias="daysInMonth")
    days: List[PhaseResult]


class ErrorResponse(BaseModel):
    error: str


ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {400: {"model": ErrorResponse}}


# ============================================================
# Dependencies
# ============================================================
def get_clock() -> Clock:
    """Overridable in tests via app.dependency_overrides."""
    return utc_now


def caller_context(request: Request) -> CallerContext:
    """
    Plan metadata from the upstream auth layer.

    request.state.plan wins (set by an auth middleware when one is mounted);
    otherwise the gateway-forwarded header named by MOONPHASE_PLAN_HEADER.
    """
    plan = getattr(request.state, "plan", None)
    if plan is None:
        plan = request.headers.get(service_config().plan_header)
    return CallerContext(plan=str(plan) if plan else None)


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def get_moon_phase(
    date_: Optional[str] = None,
    *,
    plan: Optional[str] = None,
    clock: Optional[Clock] = None,
) -> dict:
    """
    Phase for one date (None -> today in UTC).

    Raises DateParseError on malformed or impossible dates.
    """
    date_str = normalize_date_param(date_, clock=clock)
    return build_result(date_str, CallerContext(plan=plan)).to_dict()


def get_moon_calendar(
    month: Optional[str] = None,
    *,
    plan: Optional[str] = None,
    clock: Optional[Clock] = None,
) -> dict:
    """Every day of a YYYY-MM month (None -> current UTC month)."""
    ym = parse_month_param(month, clock=clock)
    return build_month(ym, CallerContext(plan=plan)).to_dict()


# ============================================================
# Endpoints
# ============================================================
def _phase_response(date_param: Optional[str], ctx: CallerContext, clock: Clock, *, route: str, timing: bool) -> PhaseResult:
    t0 = time.perf_counter()
    out = get_moon_phase(date_param, plan=ctx.plan, clock=clock)
    t1 = time.perf_counter()

    if timing:
        log.warning("timing %s date=%s source=%s total=%.6fs", route, out["date"], out["source"], t1 - t0)

    return PhaseResult.model_validate(out)


@router.get(
    "/moon-phase",
    response_model=PhaseResult,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def get_moon_phase_endpoint(
    date_str: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD (default: today UTC)"),
    timing: bool = Query(False, description="log timing (verification)"),
    ctx: CallerContext = Depends(caller_context),
    clock: Clock = Depends(get_clock),
) -> PhaseResult:
    return _phase_response(date_str, ctx, clock, route="/moon-phase", timing=timing)


@router.get(
    "/moon-phase/today",
    response_model=PhaseResult,
    response_model_exclude_none=True,
)
def get_moon_phase_today_endpoint(
    timing: bool = Query(False, description="log timing (verification)"),
    ctx: CallerContext = Depends(caller_context),
    clock: Clock = Depends(get_clock),
) -> PhaseResult:
    today = format_ymd(now_utc_from(clock))
    return _phase_response(today, ctx, clock, route="/moon-phase/today", timing=timing)


@router.get(
    "/moon-phase/{date}",
    response_model=PhaseResult,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def get_moon_phase_by_path_endpoint(
    date: str = Path(..., description="YYYY-MM-DD"),
    timing: bool = Query(False, description="log timing (verification)"),
    ctx: CallerContext = Depends(caller_context),
    clock: Clock = Depends(get_clock),
) -> PhaseResult:
    return _phase_response(date, ctx, clock, route="/moon-phase/{date}", timing=timing)


@router.get(
    "/moon-calendar",
    response_model=CalendarResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def get_moon_calendar_endpoint(
    month: Optional[str] = Query(None, description="YYYY-MM (default: current UTC month)"),
    timing: bool = Query(False, description="log timing (verification)"),
    ctx: CallerContext = Depends(caller_context),
    clock: Clock = Depends(get_clock),
) -> CalendarResponse:
    t0 = time.perf_counter()
    out = get_moon_calendar(month, plan=ctx.plan, clock=clock)
    t1 = time.perf_counter()

    if timing:
        log.warning(
            "timing /moon-calendar month=%s days=%d total=%.6fs",
            out["month"], out["daysInMonth"], t1 - t0,
        )

    return CalendarResponse.model_validate(out)
