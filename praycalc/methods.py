from dataclasses import dataclass
from types import MappingProxyType


class UnknownMethodError(ValueError):
    pass


@dataclass(frozen=True)
class Angle:
    """Sun depression angle in degrees."""
    value: float

    is_minutes = False

    def __str__(self):
        return f"{self.value:g}°"


@dataclass(frozen=True)
class Minutes:
    """Fixed number of minutes relative to a neighbouring time."""
    value: float

    is_minutes = True

    def __str__(self):
        return f"{self.value:g} min"


@dataclass(frozen=True)
class Method:
    key: str
    name: str
    fajr: Angle
    isha: object
    maghrib: object = Minutes(0)
    midnight: str = "Standard"


TIME_NAMES = {
    "imsak": "Imsak",
    "fajr": "Fajr",
    "sunrise": "Sunrise",
    "dhuhr": "Dhuhr",
    "asr": "Asr",
    "sunset": "Sunset",
    "maghrib": "Maghrib",
    "isha": "Isha",
    "midnight": "Midnight",
}

ASR_FACTORS = {"Standard": 1, "Hanafi": 2}
HIGH_LAT_METHODS = ("NightMiddle", "AngleBased", "OneSeventh", "None")
MIDNIGHT_METHODS = ("Standard", "Jafari")
TIME_FORMATS = ("24h", "12h", "12hNS", "Float")

DEFAULT_PARAMS = {"maghrib": Minutes(0), "midnight": "Standard"}

_METHOD_PARAMS = {
    "MWL": ("Muslim World League", {"fajr": 18, "isha": 17}),
    "ISNA": ("Islamic Society of North America (ISNA)", {"fajr": 15, "isha": 15}),
    "Egypt": ("Egyptian General Authority of Survey", {"fajr": 19.5, "isha": 17.5}),
    "Makkah": ("Umm Al-Qura University, Makkah", {"fajr": 18.5, "isha": Minutes(90)}),
    "Karachi": ("University of Islamic Sciences, Karachi", {"fajr": 18, "isha": 18}),
    "Tehran": (
        "Institute of Geophysics, University of Tehran",
        {"fajr": 17.7, "isha": 14, "maghrib": 4.5, "midnight": "Jafari"},
    ),
    "Jafari": (
        "Shia Ithna-Ashari, Leva Institute, Qum",
        {"fajr": 16, "isha": 14, "maghrib": 4, "midnight": "Jafari"},
    ),
}


def as_rule(value, default=Angle):
    """Coerce a bare number into a rule; rules pass through unchanged."""
    if isinstance(value, (Angle, Minutes)):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Expected a number, Angle or Minutes, got {value!r}")
    return default(float(value))


def build_method(key, name, params):
    merged = {**DEFAULT_PARAMS, **params}
    if merged["midnight"] not in MIDNIGHT_METHODS:
        raise ValueError(f"Unknown midnight method: {merged['midnight']}")
    return Method(
        key=key,
        name=name,
        fajr=as_rule(merged["fajr"]),
        isha=as_rule(merged["isha"]),
        maghrib=as_rule(merged["maghrib"]),
        midnight=merged["midnight"],
    )


METHODS = MappingProxyType(
    {key: build_method(key, name, params) for key, (name, params) in _METHOD_PARAMS.items()}
)


def get_method(key):
    try:
        return METHODS[key]
    except KeyError:
        raise UnknownMethodError(f"Unknown method: {key}") from None
