import logging
import math
from dataclasses import asdict, dataclass, replace
from datetime import date

from .astro import (
    asr_angle,
    julian_day,
    mid_day,
    rise_set_angle,
    sun_angle_time,
    time_diff,
)
from .formatting import TIME_SUFFIXES, format_time
from .methods import (
    ASR_FACTORS,
    HIGH_LAT_METHODS,
    METHODS,
    MIDNIGHT_METHODS,
    TIME_FORMATS,
    TIME_NAMES,
    Angle,
    Minutes,
    as_rule,
    get_method,
)
from .tz import dst_offset, resolve_tzinfo, standard_offset

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "MWL"

# Empirically chosen, not derived: three refinement passes starting from
# these rough guesses (hours) reproduce the reference tables.
NUM_ITERATIONS = 3
SEED_TIMES = {
    "imsak": 5,
    "fajr": 5,
    "sunrise": 6,
    "dhuhr": 12,
    "asr": 13,
    "sunset": 18,
    "maghrib": 18,
    "isha": 18,
}


@dataclass
class Coordinates:
    lat: float
    lng: float
    elevation: float = 0.0

    def __post_init__(self):
        self.lat = float(self.lat)
        self.lng = float(self.lng)
        self.elevation = float(self.elevation)
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range [-90, 90]: {self.lat}")
        if not (math.isfinite(self.lng) and math.isfinite(self.elevation)):
            raise ValueError("Longitude and elevation must be finite")

    @classmethod
    def parse(cls, coords):
        if isinstance(coords, cls):
            return coords
        if len(coords) not in (2, 3):
            raise ValueError(f"Expected [lat, lng] or [lat, lng, elevation], got {coords!r}")
        return cls(*coords)


@dataclass
class Settings:
    fajr: Angle
    isha: object
    maghrib: object = Minutes(0)
    midnight: str = "Standard"
    imsak: object = Minutes(10)
    dhuhr: Minutes = Minutes(0)
    asr: object = "Standard"
    high_lats: str = "NightMiddle"

    @classmethod
    def from_method(cls, method):
        return cls(fajr=method.fajr, isha=method.isha, maghrib=method.maghrib, midnight=method.midnight)

    @property
    def asr_factor(self):
        return ASR_FACTORS.get(self.asr) or float(self.asr)

    def update(self, **params):
        """Apply overrides. Nothing changes if any of them is rejected."""
        values = {key: _coerce_setting(key, value) for key, value in params.items()}
        for key, value in values.items():
            setattr(self, key, value)
        return self


def _coerce_setting(key, value):
    if key in ("imsak", "fajr", "maghrib", "isha"):
        return as_rule(value, Angle)
    if key == "dhuhr":
        rule = as_rule(value, Minutes)
        if not rule.is_minutes:
            raise ValueError("Dhuhr takes a number of minutes")
        return rule
    if key == "asr":
        if isinstance(value, str) and value in ASR_FACTORS:
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return value
        raise ValueError(f"Unknown asr method: {value!r}")
    if key == "high_lats":
        if value not in HIGH_LAT_METHODS:
            raise ValueError(f"Unknown high latitude method: {value!r}")
        return value
    if key == "midnight":
        if value not in MIDNIGHT_METHODS:
            raise ValueError(f"Unknown midnight method: {value!r}")
        return value
    raise ValueError(f"Unknown setting: {key}")


def configure(method=None, **overrides):
    """Build fresh settings from a named method and optional overrides."""
    settings = Settings.from_method(get_method(method or DEFAULT_METHOD))
    return settings.update(**overrides)


@dataclass(frozen=True)
class PrayerTimeSet:
    imsak: object
    fajr: object
    sunrise: object
    dhuhr: object
    asr: object
    sunset: object
    maghrib: object
    isha: object
    midnight: object

    def as_dict(self):
        return asdict(self)


def _date_parts(day):
    if isinstance(day, date):
        return date(day.year, day.month, day.day)
    if len(day) != 3:
        raise ValueError(f"Expected a date or [year, month, day], got {day!r}")
    return date(*(int(part) for part in day))


def _zone_hours(day, timezone, dst):
    tzinfo = resolve_tzinfo(timezone)
    automatic = timezone is None or timezone == "auto" or tzinfo is not None
    base = standard_offset(day.year, tzinfo) if automatic else float(timezone)
    if dst is None or dst == "auto":
        # a numeric zone carries no DST rules of its own
        return base + (dst_offset(day, tzinfo) if automatic else 0.0)
    return base + float(dst)


class PrayTimes:
    def __init__(self, method=DEFAULT_METHOD, time_format="24h", with_suffix=True, suffixes=TIME_SUFFIXES):
        if time_format not in TIME_FORMATS:
            raise ValueError(f"Unknown time format: {time_format}")
        self.calc_method = get_method(method).key
        self.settings = configure(method)
        self.offsets = {name: 0 for name in TIME_NAMES}
        self.time_format = time_format
        self.with_suffix = with_suffix
        self.suffixes = tuple(suffixes)

    def set_method(self, method):
        m = get_method(method)
        self.settings.update(fajr=m.fajr, isha=m.isha, maghrib=m.maghrib, midnight=m.midnight)
        self.calc_method = m.key

    def adjust(self, **params):
        self.settings.update(**params)

    def tune(self, offsets):
        unknown = set(offsets) - set(TIME_NAMES)
        if unknown:
            raise ValueError(f"Unknown time names for offset: {', '.join(sorted(unknown))}")
        for name, minutes in offsets.items():
            if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
                raise ValueError(f"Offset for {name} must be a number of minutes")
        self.offsets.update(offsets)

    def get_method(self):
        return self.calc_method

    def get_settings(self):
        return replace(self.settings)

    def get_offsets(self):
        return dict(self.offsets)

    def get_defaults(self):
        return METHODS

    def get_times(self, day, coords, timezone=None, dst=None, time_format=None):
        """Compute the times of one day at one place.

        ``timezone`` is an hour offset, an IANA name, a tzinfo, or
        ``"auto"``/``None`` for the host zone. With a zone (rather than a
        bare number) ``dst`` defaults to that zone's daylight saving shift.
        """
        day = _date_parts(day)
        coords = Coordinates.parse(coords)
        time_format = time_format or self.time_format
        if time_format not in TIME_FORMATS:
            raise ValueError(f"Unknown time format: {time_format}")

        tz_hours = _zone_hours(day, timezone, dst)
        jdate = julian_day(day.year, day.month, day.day) - coords.lng / (15 * 24)
        times = self._compute_times(jdate, coords, tz_hours)

        invalid = [name for name, value in times.items() if not math.isfinite(value)]
        if invalid:
            logger.debug("No solution for %s at lat=%s on %s", ", ".join(invalid), coords.lat, day)
        return PrayerTimeSet(**{name: self.get_formatted_time(value, time_format) for name, value in times.items()})

    def get_formatted_time(self, value, time_format=None, suffixes=None):
        return format_time(
            value,
            time_format or self.time_format,
            suffixes or self.suffixes,
            self.with_suffix,
        )

    def _compute_times(self, jdate, coords, tz_hours):
        times = dict(SEED_TIMES)
        for _ in range(NUM_ITERATIONS):
            times = self._compute_prayer_times(times, jdate, coords)
        times = self._adjust_times(times, coords, tz_hours)
        times["midnight"] = self._compute_midnight(times)
        return self._tune_times(times)

    def _compute_prayer_times(self, times, jdate, coords):
        jd = {name: jdate + value / 24.0 for name, value in times.items()}
        params = self.settings
        lat = coords.lat
        rise_set = rise_set_angle(coords.elevation)
        return {
            "imsak": sun_angle_time(params.imsak.value, jd["imsak"], lat, "ccw"),
            "fajr": sun_angle_time(params.fajr.value, jd["fajr"], lat, "ccw"),
            "sunrise": sun_angle_time(rise_set, jd["sunrise"], lat, "ccw"),
            "dhuhr": mid_day(jd["dhuhr"]),
            "asr": sun_angle_time(asr_angle(params.asr_factor, jd["asr"], lat), jd["asr"], lat, "cw"),
            "sunset": sun_angle_time(rise_set, jd["sunset"], lat, "cw"),
            "maghrib": sun_angle_time(params.maghrib.value, jd["maghrib"], lat, "cw"),
            "isha": sun_angle_time(params.isha.value, jd["isha"], lat, "cw"),
        }

    def _adjust_times(self, times, coords, tz_hours):
        params = self.settings
        times = {name: value + tz_hours - coords.lng / 15.0 for name, value in times.items()}

        if params.high_lats != "None":
            times = self._adjust_high_lats(times)

        if params.imsak.is_minutes:
            times["imsak"] = times["fajr"] - params.imsak.value / 60.0
        if params.maghrib.is_minutes:
            times["maghrib"] = times["sunset"] + params.maghrib.value / 60.0
        if params.isha.is_minutes:
            times["isha"] = times["maghrib"] + params.isha.value / 60.0
        times["dhuhr"] += params.dhuhr.value / 60.0
        return times

    def _compute_midnight(self, times):
        if self.settings.midnight == "Jafari":
            return times["sunset"] + time_diff(times["sunset"], times["fajr"]) / 2.0
        return times["sunset"] + time_diff(times["sunset"], times["sunrise"]) / 2.0

    def _tune_times(self, times):
        return {name: value + self.offsets[name] / 60.0 for name, value in times.items()}

    def _adjust_high_lats(self, times):
        params = self.settings
        night = time_diff(times["sunset"], times["sunrise"])
        times["imsak"] = self._adjust_hl_time("imsak", times["imsak"], times["sunrise"], params.imsak.value, night, "ccw")
        times["fajr"] = self._adjust_hl_time("fajr", times["fajr"], times["sunrise"], params.fajr.value, night, "ccw")
        times["isha"] = self._adjust_hl_time("isha", times["isha"], times["sunset"], params.isha.value, night)
        times["maghrib"] = self._adjust_hl_time("maghrib", times["maghrib"], times["sunset"], params.maghrib.value, night)
        return times

    def _adjust_hl_time(self, name, time, base, angle, night, direction="cw"):
        portion = self._night_portion(angle, night)
        diff = time_diff(time, base) if direction == "ccw" else time_diff(base, time)
        if not math.isfinite(time) or diff > portion:
            time = base - portion if direction == "ccw" else base + portion
            logger.debug("Clamped %s to %.4f (%s)", name, time, self.settings.high_lats)
        return time

    def _night_portion(self, angle, night):
        method = self.settings.high_lats
        portion = 1 / 2.0
        if method == "AngleBased":
            portion = angle / 60.0
        elif method == "OneSeventh":
            portion = 1 / 7.0
        return portion * night
