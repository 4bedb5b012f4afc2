"""Coordinate-only prayer times for callers that need no configuration.

Single evaluation at the start of the day with fixed parameters: Fajr and
Isha at 18 degrees, sunrise and sunset at 0.833 degrees, Asr shadow factor 1.
"""
import math
from datetime import datetime

from .astro import asr_angle, fix_hour, julian_day, mid_day, sun_angle_time
from .tz import gmt_offset

INVALID_TIME = "--:--"


def _to_time_string(hours):
    if not math.isfinite(hours):
        return INVALID_TIME
    total = math.floor(fix_hour(hours) * 60 + 0.5) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def get_prayer_times(day, latitude, longitude, timezone=None):
    if isinstance(day, datetime):
        day = day.date()
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f"Latitude out of range [-90, 90]: {latitude}")
    if timezone is None:
        timezone = gmt_offset(day)

    jd = julian_day(day.year, day.month, day.day)
    shift = timezone - longitude / 15.0
    times = {
        "fajr": sun_angle_time(18, jd, latitude, "ccw"),
        "sunrise": sun_angle_time(0.833, jd, latitude, "ccw"),
        "dhuhr": mid_day(jd),
        "asr": sun_angle_time(asr_angle(1, jd, latitude), jd, latitude, "cw"),
        "maghrib": sun_angle_time(0.833, jd, latitude, "cw"),
        "isha": sun_angle_time(18, jd, latitude, "cw"),
    }
    return {name: _to_time_string(value + shift) for name, value in times.items()}
