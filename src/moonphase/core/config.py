# src/moonphase/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache

MOONPHASE_SERVICE_NAME_ENV = "MOONPHASE_SERVICE_NAME"
MOONPHASE_PLAN_HEADER_ENV = "MOONPHASE_PLAN_HEADER"

DEFAULT_SERVICE_NAME = "moon-phase-api"
DEFAULT_PLAN_HEADER = "X-Consumer-Plan"


@dataclass(frozen=True)
class PhaseConfig:
    """
    Constants for the synodic-month approximation.

    The reference instant is a commonly used new moon for simple calculators;
    it only anchors the cycle, it is not an ephemeris value.
    """
    reference_new_moon_utc: datetime = field(
        default_factory=lambda: datetime(2000, 1, 6, 18, 14, 0, tzinfo=timezone.utc)
    )
    synodic_month_days: float = 29.530588853
    attribution: str = "Simple synodic-month approximation (demo)"


@dataclass(frozen=True)
class ServiceConfig:
    service_name: str = DEFAULT_SERVICE_NAME
    plan_header: str = DEFAULT_PLAN_HEADER


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


@lru_cache(maxsize=1)
def service_config() -> ServiceConfig:
    """Resolve ServiceConfig from the environment once per process."""
    return ServiceConfig(
        service_name=_env_str(MOONPHASE_SERVICE_NAME_ENV, DEFAULT_SERVICE_NAME),
        plan_header=_env_str(MOONPHASE_PLAN_HEADER_ENV, DEFAULT_PLAN_HEADER),
    )
