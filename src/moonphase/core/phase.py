# src/moonphase/core/phase.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal, Optional, Tuple

from .config import PhaseConfig
from .timeutil import require_utc

PhaseName = Literal[
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
]

Source = Literal["dummy", "approx"]

# index -> (name, emoji); 0 = new moon, 4 = full moon
PHASES: Tuple[Tuple[PhaseName, str], ...] = (
    ("New Moon", "🌑"),
    ("Waxing Crescent", "🌒"),
    ("First Quarter", "🌓"),
    ("Waxing Gibbous", "🌔"),
    ("Full Moon", "🌕"),
    ("Waning Gibbous", "🌖"),
    ("Last Quarter", "🌗"),
    ("Waning Crescent", "🌘"),
)

_MS_PER_DAY = 86_400_000
_ONE_MS = timedelta(milliseconds=1)

_DEFAULT_CONFIG = PhaseConfig()


@dataclass(frozen=True)
class PhaseFragment:
    """A phase result without its date (override entry or approximation)."""
    phase: PhaseName
    phase_index: int
    illumination: float
    emoji: str
    source: Source
    attribution: Optional[str] = None


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def phase_info_from_index(index: int) -> Tuple[PhaseName, str]:
    """(name, emoji) for an index; out-of-range values wrap around the cycle."""
    return PHASES[int(index) % len(PHASES)]


def days_since_reference(dt_utc: datetime, config: PhaseConfig = _DEFAULT_CONFIG) -> float:
    """Elapsed days from the reference new moon, at millisecond precision."""
    dt = require_utc(dt_utc, "dt_utc")
    ms = (dt - config.reference_new_moon_utc) // _ONE_MS
    return ms / _MS_PER_DAY


def cycle_position(dt_utc: datetime, config: PhaseConfig = _DEFAULT_CONFIG) -> float:
    """
    Position within the current synodic month in [0, 1).

    0 = new moon, 0.5 = full moon. Negative lunation counts (dates before the
    reference) wrap into the same interval.
    """
    lunations = days_since_reference(dt_utc, config) / config.synodic_month_days
    return ((lunations % 1.0) + 1.0) % 1.0


def phase_index_for_cycle(cycle: float) -> int:
    # cycle may round up to 1.0; the mod maps that bin back to new moon
    return int(math.floor(cycle * 8)) % 8


def illumination_for_cycle(cycle: float) -> float:
    """Sinusoidal lit fraction: 0 at new moon, 1 at full moon, 3 decimals."""
    return round(clamp01(0.5 - 0.5 * math.cos(2 * math.pi * cycle)), 3)


def approx_moon_phase(dt_utc: datetime, config: Optional[PhaseConfig] = None) -> PhaseFragment:
    """
    Closed-form synodic-month approximation.

    Good enough for a demo; it is not an ephemeris and drifts by up to a day
    or so from real phase instants.
    """
    cfg = config or _DEFAULT_CONFIG
    cycle = cycle_position(dt_utc, cfg)
    idx = phase_index_for_cycle(cycle)
    name, emoji = phase_info_from_index(idx)
    return PhaseFragment(
        phase=name,
        phase_index=idx,
        illumination=illumination_for_cycle(cycle),
        emoji=emoji,
        source="approx",
        attribution=cfg.attribution,
    )