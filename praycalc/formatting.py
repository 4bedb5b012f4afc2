import math

from .astro import fix_hour
from .methods import TIME_FORMATS

INVALID_TIME = "-----"
TIME_SUFFIXES = ("am", "pm")


def format_time(value, time_format="24h", suffixes=TIME_SUFFIXES, with_suffix=True):
    """Format an hour value.

    ``Float`` returns the value untouched, the clock formats round to the
    nearest minute. Non-finite values become ``INVALID_TIME`` in every format.
    """
    if time_format not in TIME_FORMATS:
        raise ValueError(f"Unknown time format: {time_format}")
    if not math.isfinite(value):
        return INVALID_TIME
    if time_format == "Float":
        return value

    value = fix_hour(value + 0.5 / 60)
    hours = math.floor(value)
    minutes = math.floor((value - hours) * 60)
    if time_format == "24h":
        return f"{hours:02d}:{minutes:02d}"

    hour = (hours + 12 - 1) % 12 + 1
    text = f"{hour}:{minutes:02d}"
    if time_format == "12h" and with_suffix:
        text = f"{text} {suffixes[0 if hours < 12 else 1]}"
    return text


def parse_time(text):
    """Inverse of :func:`format_time` for ``Float`` and ``24h`` output."""
    if isinstance(text, (int, float)):
        return float(text)
    if text == INVALID_TIME:
        return math.nan
    if ":" not in text:
        return float(text)
    hours, minutes = text.split(":", 1)
    return int(hours) + int(minutes) / 60.0
