"""Time formatting tests."""

import math

import pytest

from praycalc.formatting import INVALID_TIME, format_time, parse_time


def test_24h():
    assert format_time(5.5, "24h") == "05:30"
    assert format_time(13.25, "24h") == "13:15"


def test_rounds_to_nearest_minute():
    assert format_time(5.9999, "24h") == "06:00"
    assert format_time(23.9999, "24h") == "00:00"


def test_wraps_out_of_range_hours():
    assert format_time(-1.5, "24h") == "22:30"
    assert format_time(25.0, "24h") == "01:00"


def test_12h_with_and_without_suffix():
    assert format_time(13.25, "12h") == "1:15 pm"
    assert format_time(0.0, "12h") == "12:00 am"
    assert format_time(12.0, "12h") == "12:00 pm"
    assert format_time(13.25, "12hNS") == "1:15"
    assert format_time(13.25, "12h", with_suffix=False) == "1:15"
    assert format_time(9.0, "12h", suffixes=("AM", "PM")) == "9:00 AM"


def test_float_returns_raw_value():
    assert format_time(13.123456, "Float") == 13.123456
    assert format_time(25.5, "Float") == 25.5


@pytest.mark.parametrize("time_format", ["24h", "12h", "12hNS", "Float"])
def test_invalid_in_every_format(time_format):
    assert format_time(math.nan, time_format) == INVALID_TIME
    assert format_time(math.inf, time_format) == INVALID_TIME


def test_unknown_format():
    with pytest.raises(ValueError):
        format_time(1.0, "36h")


def test_float_round_trip():
    for value in (0.0, 4.123456789, 13.999999, 23.5):
        assert parse_time(format_time(value, "Float")) == value
        assert float(repr(format_time(value, "Float"))) == value


def test_parse_24h_and_invalid():
    assert parse_time("05:30") == 5.5
    assert math.isnan(parse_time(INVALID_TIME))
