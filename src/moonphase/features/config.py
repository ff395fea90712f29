# src/moonphase/features/config.py
from __future__ import annotations

"""
Feature-level configuration / constants.

- KNOWN_DATES: precomputed results for specific dates, consulted before the
  approximation. Lookup is exact "YYYY-MM-DD" string match only.
- The mapping is read-only at runtime; extend it here and redeploy.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from moonphase.core.phase import PhaseFragment

DEMO_ATTRIBUTION = "Demo dataset"

KNOWN_DATES: Mapping[str, PhaseFragment] = MappingProxyType(
    {
        "2026-03-06": PhaseFragment(
            phase="Waning Crescent",
            phase_index=7,
            illumination=0.18,
            emoji="🌘",
            source="dummy",
            attribution=DEMO_ATTRIBUTION,
        ),
        "2026-03-21": PhaseFragment(
            phase="First Quarter",
            phase_index=2,
            illumination=0.5,
            emoji="🌓",
            source="dummy",
            attribution=DEMO_ATTRIBUTION,
        ),
    }
)


def known_phase_for_date(date_str: str) -> Optional[PhaseFragment]:
    return KNOWN_DATES.get(date_str)


def plan_hint_for(plan: Optional[str]) -> Optional[str]:
    """Informational only; carries no authorization meaning."""
    if not plan:
        return None
    return f"Detected plan metadata: {plan}"
