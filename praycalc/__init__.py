from .calc import Coordinates, PrayTimes, PrayerTimeSet, Settings, configure
from .formatting import INVALID_TIME, format_time
from .methods import METHODS, Angle, Method, Minutes, UnknownMethodError
from .quick import get_prayer_times

__version__ = "1.0.0"

__all__ = [
    "Angle",
    "Coordinates",
    "INVALID_TIME",
    "METHODS",
    "Method",
    "Minutes",
    "PrayTimes",
    "PrayerTimeSet",
    "Settings",
    "UnknownMethodError",
    "configure",
    "format_time",
    "get_prayer_times",
]
