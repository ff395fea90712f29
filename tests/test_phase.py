from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from moonphase.core.config import PhaseConfig
from moonphase.core.phase import (
    PHASES,
    approx_moon_phase,
    clamp01,
    cycle_position,
    days_since_reference,
    illumination_for_cycle,
    phase_index_for_cycle,
    phase_info_from_index,
)
from moonphase.core.timeutil import midday_of, utc_midday

UTC = timezone.utc
REF = datetime(2000, 1, 6, 18, 14, tzinfo=UTC)


def test_phase_table_order():
    assert [n for n, _ in PHASES] == [
        "New Moon",
        "Waxing Crescent",
        "First Quarter",
        "Waxing Gibbous",
        "Full Moon",
        "Waning Gibbous",
        "Last Quarter",
        "Waning Crescent",
    ]
    assert len({e for _, e in PHASES}) == 8


def test_reference_instant_is_cycle_zero():
    assert days_since_reference(REF) == 0.0
    assert cycle_position(REF) == 0.0
    assert approx_moon_phase(REF).phase == "New Moon"


def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        approx_moon_phase(datetime(2000, 1, 6, 12))


def test_index_guard_at_cycle_boundary():
    assert phase_index_for_cycle(0.0) == 0
    assert phase_index_for_cycle(0.5) == 4
    assert phase_index_for_cycle(0.9999999) == 7
    # a position rounded up to exactly 1.0 is still a new moon
    assert phase_index_for_cycle(1.0) == 0


def test_phase_info_wraps():
    assert phase_info_from_index(8) == PHASES[0]
    assert phase_info_from_index(-1) == PHASES[7]


def test_illumination_extremes():
    assert illumination_for_cycle(0.0) == 0.0
    assert illumination_for_cycle(0.5) == 1.0
    assert illumination_for_cycle(0.25) == 0.5
    assert illumination_for_cycle(0.999) <= 0.001


def test_clamp01():
    assert clamp01(-0.2) == 0.0
    assert clamp01(1.5) == 1.0
    assert clamp01(0.3) == 0.3


def test_day_of_reference_is_late_waning_crescent():
    # midday is 6h14m before the reference new moon
    r = approx_moon_phase(utc_midday(2000, 1, 6))
    assert r.phase == "Waning Crescent"
    assert r.phase_index == 7
    assert r.illumination <= 0.002
    assert r.source == "approx"
    assert r.attribution == "Simple synodic-month approximation (demo)"


def test_day_after_reference_is_new_moon():
    r = approx_moon_phase(utc_midday(2000, 1, 7))
    assert r.phase_index == 0
    assert r.emoji == "🌑"
    assert r.illumination < 0.01


def test_half_cycle_later_is_full():
    r = approx_moon_phase(utc_midday(2000, 1, 22))
    assert r.phase == "Full Moon"
    assert r.phase_index == 4
    assert r.illumination > 0.98


def test_negative_lunations_normalize():
    # ~0.21 lunations before the reference -> cycle ~0.79
    r = approx_moon_phase(utc_midday(1999, 12, 31))
    assert r.phase == "Last Quarter"
    assert r.phase_index == 6
    c = cycle_position(utc_midday(1999, 12, 31))
    assert 0.78 < c < 0.80


def test_one_synodic_month_later_same_phase():
    cfg = PhaseConfig()
    t = REF + timedelta(days=cfg.synodic_month_days * 100 + 10)
    assert cycle_position(t) == pytest.approx(10 / cfg.synodic_month_days, abs=1e-6)


def test_custom_config():
    cfg = PhaseConfig(reference_new_moon_utc=utc_midday(2000, 1, 22), attribution="x")
    r = approx_moon_phase(utc_midday(2000, 1, 22), cfg)
    assert r.phase_index == 0
    assert r.illumination == 0.0
    assert r.attribution == "x"


def test_bounds_and_rounding_over_many_days():
    d = date(1950, 1, 1)
    for _ in range(0, 40000, 7):
        r = approx_moon_phase(midday_of(d))
        assert 0 <= r.phase_index <= 7
        assert 0.0 <= r.illumination <= 1.0
        assert round(r.illumination, 3) == r.illumination
        assert PHASES[r.phase_index] == (r.phase, r.emoji)
        d = d + timedelta(days=7)


def test_illumination_tracks_cycle():
    d = date(2010, 1, 1)
    for _ in range(400):
        t = midday_of(d)
        c = cycle_position(t)
        illum = approx_moon_phase(t).illumination
        if abs(c - 0.5) < 0.02:
            assert illum > 0.99
        if c < 0.02 or c > 0.98:
            assert illum < 0.01
        d = d + timedelta(days=1)
