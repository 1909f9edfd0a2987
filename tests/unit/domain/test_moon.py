"""Unit tests for the moon phase calculation."""

from datetime import UTC, datetime, timedelta

import pytest

from kiawah_concierge.domain.moon import (
    PHASE_RANGES,
    REFERENCE_NEW_MOON,
    SYNODIC_MONTH_DAYS,
    calculate_moon_phase,
    phase_name_and_icon,
)

pytestmark = pytest.mark.unit

TOLERANCE = 1e-6


def _distance_from_new(phase: float) -> float:
    return min(phase, 1.0 - phase)


class TestPhaseRanges:
    def test_ranges_partition_unit_interval(self):
        assert PHASE_RANGES[0][0] == 0.0
        assert PHASE_RANGES[-1][1] == 1.0
        for (_, end, _, _), (start, _, _, _) in zip(PHASE_RANGES, PHASE_RANGES[1:]):
            assert end == start
        assert all(start < end for start, end, _, _ in PHASE_RANGES)

    def test_eight_distinct_names(self):
        names = [name for _, _, name, _ in PHASE_RANGES]
        assert len(set(names)) == 8
        assert names[0] == names[-1] == "New Moon"

    @pytest.mark.parametrize(
        "phase, expected",
        [
            (0.0, "New Moon"),
            (0.0299, "New Moon"),
            (0.03, "Waxing Crescent"),
            (0.22, "First Quarter"),
            (0.28, "Waxing Gibbous"),
            (0.47, "Full Moon"),
            (0.5, "Full Moon"),
            (0.53, "Waning Gibbous"),
            (0.72, "Last Quarter"),
            (0.78, "Waning Crescent"),
            (0.97, "New Moon"),
            (0.999999, "New Moon"),
        ],
    )
    def test_boundaries_are_half_open(self, phase, expected):
        assert phase_name_and_icon(phase)[0] == expected

    def test_icons_follow_names(self):
        assert phase_name_and_icon(0.5) == ("Full Moon", "moonphase.full.moon")
        assert phase_name_and_icon(0.0) == ("New Moon", "moonphase.new.moon")


class TestCalculateMoonPhase:
    def test_reference_instant_is_new_moon(self):
        moon = calculate_moon_phase(REFERENCE_NEW_MOON)
        assert moon.phase == pytest.approx(0.0, abs=TOLERANCE)
        assert moon.name == "New Moon"

    def test_one_synodic_month_later_is_new_again(self):
        moon = calculate_moon_phase(REFERENCE_NEW_MOON + timedelta(days=SYNODIC_MONTH_DAYS))
        assert _distance_from_new(moon.phase) < TOLERANCE
        assert moon.name == "New Moon"

    def test_many_cycles_later_is_periodic(self):
        when = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
        later = when + timedelta(days=SYNODIC_MONTH_DAYS * 12)
        a = calculate_moon_phase(when).phase
        b = calculate_moon_phase(later).phase
        assert min(abs(a - b), 1 - abs(a - b)) < TOLERANCE

    def test_half_cycle_is_full_moon(self):
        moon = calculate_moon_phase(REFERENCE_NEW_MOON + timedelta(days=SYNODIC_MONTH_DAYS / 2))
        assert moon.phase == pytest.approx(0.5, abs=TOLERANCE)
        assert moon.name == "Full Moon"
        assert moon.illumination_percent == 100

    def test_before_reference_still_in_unit_interval(self):
        moon = calculate_moon_phase(datetime(1990, 5, 1, tzinfo=UTC))
        assert 0.0 <= moon.phase < 1.0

    def test_naive_datetime_is_treated_as_utc(self):
        naive = datetime(2024, 6, 1, 12, 0)
        aware = naive.replace(tzinfo=UTC)
        assert calculate_moon_phase(naive) == calculate_moon_phase(aware)
