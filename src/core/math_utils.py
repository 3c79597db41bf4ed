"""Small numeric helpers shared by the normalization rules."""

from __future__ import annotations

import math
from typing import Any


def bound(value: float, min_value: float, max_value: float) -> float:
    """Clamp ``value`` into the inclusive range ``[min_value, max_value]``."""
    if value > max_value:
        return max_value
    if value < min_value:
        return min_value
    return value


def is_integer(value: Any) -> bool:
    """Return True for integral numbers (bools excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    return False


def is_number(value: Any) -> bool:
    """Return True for finite int/float values (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


__all__ = ["bound", "is_integer", "is_number"]
