# src/moonphase/features/result.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from moonphase.core.config import PhaseConfig
from moonphase.core.phase import PhaseFragment, PhaseName, Source, approx_moon_phase
from moonphase.core.timeutil import midday_of
from moonphase.features.config import known_phase_for_date, plan_hint_for


@dataclass(frozen=True)
class CallerContext:
    """
    What the upstream (already authenticated) layer tells us about the caller.

    plan is opaque advisory text, e.g. "free" / "pro".
    """
    plan: Optional[str] = None


ANONYMOUS = CallerContext()


@dataclass(frozen=True)
class MoonPhaseResult:
    date: str
    phase: PhaseName
    phase_index: int
    illumination: float
    emoji: str
    source: Source
    attribution: Optional[str] = None
    plan_hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape (camelCase); unset optional fields are omitted."""
        out: Dict[str, Any] = {
            "date": self.date,
            "phase": self.phase,
            "phaseIndex": self.phase_index,
            "illumination": self.illumination,
            "emoji": self.emoji,
            "source": self.source,
        }
        if self.attribution is not None:
            out["attribution"] = self.attribution
        if self.plan_hint is not None:
            out["planHint"] = self.plan_hint
        return out


def phase_fragment_for(date_str: str, *, config: Optional[PhaseConfig] = None) -> PhaseFragment:
    """Override table first, approximation otherwise."""
    known = known_phase_for_date(date_str)
    if known is not None:
        return known
    return approx_moon_phase(midday_of(date.fromisoformat(date_str)), config)


def build_result(
    date_str: str,
    ctx: CallerContext = ANONYMOUS,
    *,
    config: Optional[PhaseConfig] = None,
) -> MoonPhaseResult:
    """
    date_str must already be canonical YYYY-MM-DD (no validation here).
    """
    frag = phase_fragment_for(date_str, config=config)
    return MoonPhaseResult(
        date=date_str,
        phase=frag.phase,
        phase_index=frag.phase_index,
        illumination=frag.illumination,
        emoji=frag.emoji,
        source=frag.source,
        attribution=frag.attribution,
        plan_hint=plan_hint_for(ctx.plan),
    )
