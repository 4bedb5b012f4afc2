"""Time zone helper tests."""

from datetime import date, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from praycalc.tz import dst_offset, get_timezone, gmt_offset, resolve_tzinfo, standard_offset


@pytest.fixture
def berlin():
    try:
        return ZoneInfo("Europe/Berlin")
    except ZoneInfoNotFoundError:
        pytest.skip("time zone database not available")


def test_fixed_offset_zone():
    tz = timezone(timedelta(hours=5, minutes=30))
    assert gmt_offset(date(2024, 6, 1), tz) == 5.5
    assert standard_offset(2024, tz) == 5.5
    assert dst_offset(date(2024, 6, 1), tz) == 0.0


def test_standard_offset_is_the_smaller_one(berlin):
    assert standard_offset(2024, berlin) == 1.0
    assert dst_offset(date(2024, 7, 1), berlin) == 1.0
    assert dst_offset(date(2024, 1, 15), berlin) == 0.0


def test_host_zone():
    offset = gmt_offset(date(2024, 6, 1))
    assert -12.0 <= offset <= 14.0
    assert dst_offset(date(2024, 6, 1)) >= 0.0


def test_resolve_tzinfo():
    tz = timezone.utc
    assert resolve_tzinfo(tz) is tz
    assert resolve_tzinfo("auto") is None
    assert resolve_tzinfo(None) is None
    assert resolve_tzinfo(3) is None


def test_unknown_zone_name():
    with pytest.raises(ValueError, match="Unknown time zone"):
        get_timezone("Not/AZone")


def test_local_zone_without_name():
    assert get_timezone(None) is not None
