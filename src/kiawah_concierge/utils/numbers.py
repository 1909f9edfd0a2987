"""Numeric coercion for loosely typed provider payloads."""

from __future__ import annotations

import math
from typing import Any


def to_number(value: Any) -> float | None:
    """
    Accept ints and floats only.

    Booleans, strings and None are rejected; JSON gives no other numeric types.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def parse_float(value: str, default: float = 0.0) -> float:
    """Parse a decimal string, falling back to ``default``."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
