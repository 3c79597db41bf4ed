"""Parsers for angle and angular-speed expressions.

Both accept either a plain number or a unit-suffixed string such as
``"90deg"`` or ``"2rpm"`` and return a typed result in radians.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.core.config_loader import ConfigError, ErrorKind
from src.core.math_utils import bound, is_number

TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2

_EXPRESSION_RE = re.compile(r"^([-+]?(?:\d+(?:\.\d*)?|\.\d+))\s*(.*)$")

_ANGLE_UNITS = {
    "": 1.0,
    "rad": 1.0,
    "rads": 1.0,
    "deg": math.pi / 180,
    "degs": math.pi / 180,
}

# factor applied to the magnitude to get radians per second
_SPEED_UNITS = {
    "dps": math.pi / 180,
    "degrees per second": math.pi / 180,
    "dpm": math.pi / 180 / 60,
    "degrees per minute": math.pi / 180 / 60,
    "radians per second": 1.0,
    "radians per minute": 1.0 / 60,
    "rps": TWO_PI,
    "revolutions per second": TWO_PI,
    "rpm": TWO_PI / 60,
    "revolutions per minute": TWO_PI / 60,
}


class AngleMode(str, Enum):
    """How a parsed angle is brought into its canonical range."""

    FULL_TURN = "full_turn"  # wrapped into [0, 2pi)
    HALF_TURN = "half_turn"  # wrapped into [-pi, pi), then clamped to [-pi/2, pi/2]


@dataclass(frozen=True)
class ParsedAngle:
    radians: float
    mode: AngleMode


@dataclass(frozen=True)
class ParsedSpeed:
    radians_per_second: float


def _split_expression(text: str) -> tuple[float, str] | None:
    match = _EXPRESSION_RE.match(text.strip().lower())
    if match is None:
        return None
    magnitude = float(match.group(1))
    # digit runs past the float range parse as inf
    if not math.isfinite(magnitude):
        return None
    return magnitude, " ".join(match.group(2).split())


def _wrap_full_turn(value: float) -> float:
    if 0 <= value < TWO_PI:
        return value
    wrapped = value % TWO_PI
    # tiny negative inputs can round up to exactly 2pi
    return 0.0 if wrapped >= TWO_PI else wrapped


def _wrap_half_turn(value: float) -> float:
    if not -math.pi <= value < math.pi:
        value = _wrap_full_turn(value + math.pi) - math.pi
    return bound(value, -HALF_PI, HALF_PI)


def parse_angle(value: Any, mode: AngleMode = AngleMode.FULL_TURN, *, option: str | None = None) -> ParsedAngle:
    """Parse an angle expression into radians.

    Plain numbers are radians. Strings may carry a ``deg``/``degs`` or
    ``rad``/``rads`` suffix; without a suffix they are radians too.

    Raises:
        ConfigError: with kind ``angle_parse`` when the expression is not
            a finite number or a recognizable unit-suffixed string.
    """
    if is_number(value):
        radians = float(value)
    elif isinstance(value, str):
        parts = _split_expression(value)
        if parts is None:
            raise ConfigError(f"Unknown angle {value!r}", kind=ErrorKind.ANGLE_PARSE, option=option)
        magnitude, unit = parts
        factor = _ANGLE_UNITS.get(unit)
        if factor is None:
            raise ConfigError(f"Unknown angle unit {unit!r} in {value!r}", kind=ErrorKind.ANGLE_PARSE, option=option)
        radians = magnitude * factor
        if not math.isfinite(radians):
            raise ConfigError(f"Angle {value!r} is out of range", kind=ErrorKind.ANGLE_PARSE, option=option)
    else:
        raise ConfigError(f"Unknown angle {value!r}", kind=ErrorKind.ANGLE_PARSE, option=option)

    if mode is AngleMode.HALF_TURN:
        return ParsedAngle(_wrap_half_turn(radians), mode)
    return ParsedAngle(_wrap_full_turn(radians), mode)


def parse_speed(value: Any, *, option: str | None = None) -> ParsedSpeed:
    """Parse an angular speed expression into radians per second.

    Raises:
        ConfigError: with kind ``speed_parse`` on an unknown unit or a
            non-numeric magnitude.
    """
    if is_number(value):
        return ParsedSpeed(float(value))
    if not isinstance(value, str):
        raise ConfigError(f"Unknown speed {value!r}", kind=ErrorKind.SPEED_PARSE, option=option)

    parts = _split_expression(value)
    if parts is None:
        raise ConfigError(f"Unknown speed {value!r}", kind=ErrorKind.SPEED_PARSE, option=option)
    magnitude, unit = parts
    factor = _SPEED_UNITS.get(unit)
    if factor is None:
        raise ConfigError(f"Unknown speed unit {unit!r} in {value!r}", kind=ErrorKind.SPEED_PARSE, option=option)
    speed = magnitude * factor
    if not math.isfinite(speed):
        raise ConfigError(f"Speed {value!r} is out of range", kind=ErrorKind.SPEED_PARSE, option=option)
    return ParsedSpeed(speed)


__all__ = [
    "AngleMode",
    "HALF_PI",
    "ParsedAngle",
    "ParsedSpeed",
    "TWO_PI",
    "parse_angle",
    "parse_speed",
]
