import math

import pytest

from wireframe_svg.geometry import ORIGIN, Offset, format_number, parse_int, parse_number


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10", 10),
        (" 42", 42),
        ("-7", -7),
        ("+3", 3),
        ("12.7", 12),
        ("15px", 15),
        (8, 8),
        (9.9, 9),
        (-9.9, -9),
    ],
)
def test_parse_int_takes_leading_integer(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "px12", float("inf"), float("nan"), True])
def test_parse_int_returns_nan_for_non_numeric(raw):
    assert math.isnan(parse_int(raw))


def test_parse_number_keeps_fractions_and_defaults():
    assert parse_number("0.25") == 0.25
    assert parse_number(3) == 3
    assert parse_number(None, 0.5) == 0.5
    assert parse_number("bogus", 1.0) == 1.0


def test_format_number_matches_markup_conventions():
    assert format_number(10) == "10"
    assert format_number(210.0) == "210"
    assert format_number(11.35) == "11.35"
    assert format_number(float("nan")) == "NaN"
    assert format_number(float("-inf")) == "-Infinity"


def test_offset_shift_accumulates():
    assert ORIGIN.shifted(10, 5).shifted(3, 4) == Offset(13, 9)
