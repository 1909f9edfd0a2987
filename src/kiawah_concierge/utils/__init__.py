"""Shared utility helpers."""

from kiawah_concierge.utils.numbers import parse_float, round_half_away, to_number
from kiawah_concierge.utils.timefmt import display_time, get_zone, parse_iso_instant, reformat_local

__all__ = [
    "to_number",
    "round_half_away",
    "parse_float",
    "display_time",
    "get_zone",
    "parse_iso_instant",
    "reformat_local",
]
