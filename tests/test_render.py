"""Rendering tests for the command line output."""

import copy
from datetime import date

import pytest

from praycalc.calc import PrayerTimeSet
from praycalc.config import DEFAULT_CONFIG
from praycalc.formatting import INVALID_TIME
from praycalc.methods import Minutes
from praycalc.render import (
    active_location,
    build_pray_times,
    compute_day,
    next_prayer,
    render_json,
    render_table,
)

CAIRO_LOC = {"lat": 30.0444, "lng": 31.2357, "elevation": 0, "tz": None, "label": "Cairo"}


@pytest.fixture
def config():
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["locations"]["Cairo"] = dict(CAIRO_LOC)
    config["location"] = "Cairo"
    return config


def _times(**values):
    base = {name: 0.0 for name in PrayerTimeSet.__dataclass_fields__}
    base.update(values)
    return PrayerTimeSet(**base)


def test_build_pray_times_applies_config(config):
    config.update({"method": "Makkah", "asr": "Hanafi", "high_lats": "OneSeventh", "imsak_minutes": 5})
    config["offsets"]["isha"] = 4
    pray = build_pray_times(config)
    settings = pray.get_settings()
    assert pray.get_method() == "Makkah"
    assert settings.asr == "Hanafi"
    assert settings.high_lats == "OneSeventh"
    assert settings.imsak == Minutes(5)
    assert pray.get_offsets()["isha"] == 4


def test_active_location_from_config(config):
    loc = active_location(config)
    assert loc["label"] == "Cairo"
    assert loc["lat"] == 30.0444


def test_active_location_ad_hoc(config):
    loc = active_location(config, lat=21.4225, lng=39.8262, tz="Asia/Riyadh")
    assert loc["tz"] == "Asia/Riyadh"
    assert loc["elevation"] == 0.0
    assert loc["label"] == "21.4225, 39.8262"


def test_active_location_missing():
    config = copy.deepcopy(DEFAULT_CONFIG)
    with pytest.raises(ValueError, match="No location set"):
        active_location(config)


def test_compute_day(config):
    times = compute_day(build_pray_times(config), date(2024, 6, 21), CAIRO_LOC)
    assert times.dhuhr != INVALID_TIME


def test_next_prayer():
    times = _times(fajr=3.5, dhuhr=12.9, asr=16.5, maghrib=19.9, isha=21.5)
    assert next_prayer(times, 10.0) == ("dhuhr", 12.9)
    assert next_prayer(times, 2.0) == ("fajr", 3.5)
    assert next_prayer(times, 22.0) is None


def test_next_prayer_skips_invalid():
    times = _times(fajr=INVALID_TIME, dhuhr=12.9, asr=16.5, maghrib=19.9, isha=INVALID_TIME)
    assert next_prayer(times, 1.0) == ("dhuhr", 12.9)
    assert next_prayer(times, 20.0) is None


def test_render_table():
    times = _times(fajr="03:10", dhuhr="12:57")
    text = render_table(times, "Cairo", "Egypt", "Standard", next_name="dhuhr")
    lines = text.splitlines()
    assert lines[0] == "Cairo (Egyptian General Authority of Survey, Asr: Standard)"
    assert len(lines) == 10
    assert "Fajr     03:10" in lines
    assert "Dhuhr    12:57  <" in lines


def test_render_json():
    times = _times(fajr="03:10")
    payload = render_json(times, "Cairo", "Egypt", date(2024, 6, 21))
    assert payload["date"] == "2024-06-21"
    assert payload["method"] == "Egypt"
    assert payload["times"]["fajr"] == "03:10"
