import math
from datetime import datetime

from .calc import PrayTimes
from .formatting import parse_time
from .methods import METHODS, Minutes, TIME_NAMES
from .tz import get_timezone

PRAYER_ORDER = ["fajr", "dhuhr", "asr", "maghrib", "isha"]


def build_pray_times(config):
    pray = PrayTimes(config["method"], time_format=config["time_format"])
    pray.adjust(
        asr=config["asr"],
        high_lats=config["high_lats"],
        imsak=Minutes(config["imsak_minutes"]),
        dhuhr=Minutes(config["dhuhr_minutes"]),
    )
    pray.tune(config["offsets"])
    return pray


def active_location(config, lat=None, lng=None, elevation=None, tz=None):
    if lat is not None and lng is not None:
        return {
            "lat": float(lat),
            "lng": float(lng),
            "elevation": float(elevation or 0),
            "tz": tz,
            "label": f"{float(lat):.4f}, {float(lng):.4f}",
        }
    key = config.get("location")
    loc = config.get("locations", {}).get(key) if key else None
    if not loc:
        raise ValueError("No location set (use --set-location or --lat/--lng)")
    loc = dict(loc)
    loc.setdefault("elevation", 0)
    loc.setdefault("label", key)
    if tz:
        loc["tz"] = tz
    return loc


def compute_day(pray, day, loc, time_format=None):
    coords = (loc["lat"], loc["lng"], loc.get("elevation", 0))
    return pray.get_times(day, coords, timezone=loc.get("tz") or "auto", time_format=time_format)


def next_prayer(times, now_hours):
    """Name and hour of the first prayer after ``now_hours``, or ``None``."""
    values = times.as_dict()
    for name in PRAYER_ORDER:
        value = parse_time(values[name])
        if not math.isnan(value) and value > now_hours:
            return name, value
    return None


def render_table(times, label, method_key, asr, next_name=None):
    lines = [f"{label} ({METHODS[method_key].name}, Asr: {asr})"]
    for name, value in times.as_dict().items():
        marker = "  <" if name == next_name else ""
        lines.append(f"{TIME_NAMES[name]:<9}{value}{marker}")
    return "\n".join(lines)


def render_json(times, label, method_key, day):
    return {
        "location": label,
        "method": method_key,
        "date": day.isoformat(),
        "times": times.as_dict(),
    }


def render_day(config, day, loc, time_format=None, as_json=False):
    pray = build_pray_times(config)
    times = compute_day(pray, day, loc, time_format)
    if as_json:
        return render_json(times, loc["label"], pray.get_method(), day)

    tzinfo = get_timezone(loc.get("tz"))
    now = datetime.now(tzinfo)
    next_name = None
    if now.date() == day:
        upcoming = next_prayer(compute_day(pray, day, loc, "Float"), now.hour + now.minute / 60.0)
        next_name = upcoming[0] if upcoming else None
    return render_table(times, loc["label"], pray.get_method(), config["asr"], next_name)
