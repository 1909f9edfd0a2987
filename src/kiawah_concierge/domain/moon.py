"""
Moon phase calculation.

Pure function of an instant: days elapsed since a known new moon, folded
into one synodic month. No network involved.
"""

from __future__ import annotations

from datetime import UTC, datetime

from kiawah_concierge.domain.models import MoonPhase

# Known new moon: 2000-01-06 18:14 UTC
REFERENCE_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=UTC)

# Average lunar cycle in days
SYNODIC_MONTH_DAYS = 29.53058867

SECONDS_PER_DAY = 86400.0

# Half-open [start, end) ranges covering [0, 1) without gaps. New Moon wraps
# around the cycle boundary, so it appears at both ends.
PHASE_RANGES: tuple[tuple[float, float, str, str], ...] = (
    (0.00, 0.03, "New Moon", "moonphase.new.moon"),
    (0.03, 0.22, "Waxing Crescent", "moonphase.waxing.crescent"),
    (0.22, 0.28, "First Quarter", "moonphase.first.quarter"),
    (0.28, 0.47, "Waxing Gibbous", "moonphase.waxing.gibbous"),
    (0.47, 0.53, "Full Moon", "moonphase.full.moon"),
    (0.53, 0.72, "Waning Gibbous", "moonphase.waning.gibbous"),
    (0.72, 0.78, "Last Quarter", "moonphase.last.quarter"),
    (0.78, 0.97, "Waning Crescent", "moonphase.waning.crescent"),
    (0.97, 1.00, "New Moon", "moonphase.new.moon"),
)


def phase_name_and_icon(phase: float) -> tuple[str, str]:
    """Name and icon for a phase fraction in [0, 1)."""
    phase = phase % 1.0
    for start, end, name, icon in PHASE_RANGES:
        if start <= phase < end:
            return name, icon
    # phase % 1.0 can round up to exactly 1.0 for tiny negative inputs
    return "New Moon", "moonphase.new.moon"


def calculate_moon_phase(when: datetime) -> MoonPhase:
    """
    Moon phase at an instant.

    Naive datetimes are taken as UTC.
    """
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)

    days_since_reference = (when - REFERENCE_NEW_MOON).total_seconds() / SECONDS_PER_DAY
    # Python's % already folds negatives into [0, SYNODIC_MONTH_DAYS)
    cycle_position = days_since_reference % SYNODIC_MONTH_DAYS
    phase = cycle_position / SYNODIC_MONTH_DAYS
    if phase >= 1.0:
        phase = 0.0

    name, icon = phase_name_and_icon(phase)
    return MoonPhase(phase=phase, name=name, icon=icon)
