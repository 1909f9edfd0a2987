"""
Display-time helpers.

Providers hand out local wall-clock strings in a handful of layouts; the UI
shows 12-hour "h:mm AM" strings.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

# Open-Meteo local ISO minutes, e.g. "2024-06-01T06:12"
OPEN_METEO_TIME_FORMAT = "%Y-%m-%dT%H:%M"
# NOAA tide predictions, e.g. "2024-06-01 06:12"
NOAA_TIME_FORMAT = "%Y-%m-%d %H:%M"
# Sunrise-sunset ISO-8601, strict (fractional seconds) first
ISO_FRACTIONAL_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
ISO_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


@lru_cache(maxsize=16)
def get_zone(name: str) -> ZoneInfo:
    """Cached ZoneInfo lookup."""
    return ZoneInfo(name)


def display_time(value: datetime) -> str:
    """Format as 12-hour clock without a leading zero ("6:12 AM")."""
    return value.strftime("%I:%M %p").lstrip("0")


def parse_local(value: str, fmt: str, zone: tzinfo) -> datetime | None:
    """Parse a wall-clock string in ``zone``; None if it does not match."""
    try:
        return datetime.strptime(value, fmt).replace(tzinfo=zone)
    except (TypeError, ValueError):
        return None


def reformat_local(value: str, fmt: str, zone: tzinfo) -> str:
    """Reformat a wall-clock string for display, keeping the raw string on failure."""
    parsed = parse_local(value, fmt, zone)
    return display_time(parsed) if parsed else value


def parse_iso_instant(value: str) -> datetime | None:
    """
    Parse an ISO-8601 instant with an offset.

    Tries the stricter fractional-seconds layout first, then plain seconds.
    """
    if not isinstance(value, str):
        return None
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    for fmt in (ISO_FRACTIONAL_FORMAT, ISO_SECONDS_FORMAT):
        try:
            return datetime.strptime(normalized, fmt)
        except ValueError:
            continue
    return None


def truncate_to_hour(value: datetime) -> datetime:
    return value.replace(minute=0, second=0, microsecond=0)
