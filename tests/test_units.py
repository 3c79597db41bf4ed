from __future__ import annotations

import math

import pytest

from src.core.config_loader import ConfigError, ErrorKind
from src.core.math_utils import bound, is_integer
from src.core.units import AngleMode, parse_angle, parse_speed


def test_bound_clamps_into_inclusive_range():
    assert bound(5, 1, 10) == 5
    assert bound(-1, 1, 10) == 1
    assert bound(11, 1, 10) == 10
    assert bound(10, 1, 10) == 10


def test_is_integer_rejects_bools_and_fractions():
    assert is_integer(3)
    assert is_integer(4.0)
    assert not is_integer(True)
    assert not is_integer(2.5)
    assert not is_integer("3")


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0.0),
        (1.5, 1.5),
        ("90deg", math.pi / 2),
        ("180 degs", math.pi),
        ("1rad", 1.0),
        ("2.5RADS", 2.5),
        ("0.5", 0.5),
        (-math.pi / 2, 3 * math.pi / 2),
        ("-90deg", 3 * math.pi / 2),
        (2 * math.pi, 0.0),
        ("450deg", math.pi / 2),
    ],
)
def test_full_turn_wraps_into_zero_to_two_pi(value, expected):
    parsed = parse_angle(value)
    assert parsed.mode is AngleMode.FULL_TURN
    assert parsed.radians == pytest.approx(expected)
    assert 0 <= parsed.radians < 2 * math.pi


def test_full_turn_keeps_in_range_values_exact():
    assert parse_angle(0.1).radians == 0.1
    assert parse_angle(6.0).radians == 6.0


def test_full_turn_tiny_negative_does_not_reach_two_pi():
    assert parse_angle(-1e-20).radians < 2 * math.pi


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0.0),
        ("45deg", math.pi / 4),
        ("-30deg", -math.pi / 6),
        (2.0, math.pi / 2),
        (-2.0, -math.pi / 2),
        ("120deg", math.pi / 2),
        (3 * math.pi / 2, -math.pi / 2),
        ("370deg", math.radians(10)),
    ],
)
def test_half_turn_wraps_then_clamps(value, expected):
    parsed = parse_angle(value, AngleMode.HALF_TURN)
    assert parsed.radians == pytest.approx(expected)
    assert -math.pi / 2 <= parsed.radians <= math.pi / 2


def test_half_turn_keeps_in_range_values_exact():
    assert parse_angle(0.1, AngleMode.HALF_TURN).radians == 0.1
    assert parse_angle(-1.2, AngleMode.HALF_TURN).radians == -1.2


@pytest.mark.parametrize(
    "value", ["north", "10grad", "", None, [1], float("nan"), float("inf"), True, "9" * 400, "-" + "9" * 400 + "deg"]
)
def test_invalid_angle_raises_angle_parse_error(value):
    with pytest.raises(ConfigError) as excinfo:
        parse_angle(value, option="defaultLong")
    assert excinfo.value.kind is ErrorKind.ANGLE_PARSE
    assert excinfo.value.option == "defaultLong"


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.5, 1.5),
        ("4rpm", 4 * 2 * math.pi / 60),
        ("2 revolutions per minute", 2 * 2 * math.pi / 60),
        ("1rps", 2 * math.pi),
        ("90dps", math.pi / 2),
        ("60 degrees per minute", math.pi / 180),
        ("3 radians per second", 3.0),
        ("120 radians per minute", 2.0),
    ],
)
def test_parse_speed_units(value, expected):
    assert parse_speed(value).radians_per_second == pytest.approx(expected)


def test_four_rpm_matches_reference_value():
    assert parse_speed("4rpm").radians_per_second == pytest.approx(0.41888, abs=1e-5)


@pytest.mark.parametrize(
    "value", ["4", "fast", "4 furlongs", None, {"rpm": 4}, False, "1" * 400 + "rpm", "9" * 308 + "rps"]
)
def test_invalid_speed_raises_speed_parse_error(value):
    with pytest.raises(ConfigError) as excinfo:
        parse_speed(value, option="animSpeed")
    assert excinfo.value.kind is ErrorKind.SPEED_PARSE
