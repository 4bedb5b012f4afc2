import argparse
import json
import logging
import sys
from datetime import date, datetime

from .config import CONFIG_PATH, load_config, save_config
from .methods import ASR_FACTORS, HIGH_LAT_METHODS, METHODS, TIME_FORMATS, TIME_NAMES
from .render import active_location, render_day
from .tz import get_timezone

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    root = logging.getLogger("praycalc")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _parse_date(text, tz_name):
    if not text:
        return datetime.now(get_timezone(tz_name)).date()
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {text}") from None


def handle_cli(args):
    config_path = args.config or CONFIG_PATH
    config = load_config(config_path)

    if args.list_methods:
        for key, method in METHODS.items():
            print(f"{key}: {method.name} (Fajr {method.fajr}, Isha {method.isha})")
        return 0

    if args.list_locations:
        for name, loc in config.get("locations", {}).items():
            active = "*" if name == config.get("location") else " "
            label = loc.get("label") or name
            tz = loc.get("tz") or "local"
            print(f"{active} {name}: {label} ({loc['lat']}, {loc['lng']}) [{tz}]")
        return 0

    if args.set_location:
        if args.lat is None or args.lng is None:
            raise ValueError("--set-location needs --lat and --lng")
        lat = float(args.lat)
        if not -90.0 <= lat <= 90.0:
            raise ValueError(f"Latitude out of range [-90, 90]: {lat}")
        if args.tz:
            get_timezone(args.tz)
        config.setdefault("locations", {})[args.set_location] = {
            "lat": lat,
            "lng": float(args.lng),
            "elevation": float(args.elevation or 0),
            "tz": args.tz,
            "label": args.set_location,
        }
        config["location"] = args.set_location
        save_config(config, config_path)
        return 0

    if args.use_location:
        if args.use_location not in config.get("locations", {}):
            raise ValueError(f"Unknown location: {args.use_location}")
        config["location"] = args.use_location
        save_config(config, config_path)
        return 0

    if args.set_method:
        if args.set_method not in METHODS:
            raise ValueError(f"Unknown method: {args.set_method}")
        config["method"] = args.set_method
        save_config(config, config_path)
        return 0

    if args.set_asr:
        config["asr"] = args.set_asr
        save_config(config, config_path)
        return 0

    if args.set_high_lats:
        config["high_lats"] = args.set_high_lats
        save_config(config, config_path)
        return 0

    if args.set_format:
        config["time_format"] = args.set_format
        save_config(config, config_path)
        return 0

    if args.set_offset:
        name, minutes = args.set_offset
        key = name.lower()
        if key not in TIME_NAMES:
            raise ValueError(f"Unknown prayer for offset: {name}")
        try:
            config["offsets"][key] = int(minutes)
        except ValueError:
            raise ValueError(f"Offset must be a whole number of minutes: {minutes}") from None
        save_config(config, config_path)
        return 0

    loc = active_location(config, args.lat, args.lng, args.elevation, args.tz)
    day = _parse_date(args.date, loc.get("tz"))
    output = render_day(config, day, loc, time_format=args.format, as_json=args.json)
    if args.json:
        print(json.dumps(output, ensure_ascii=True))
    else:
        print(output)
    return 0


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="praycalc", description="Astronomical prayer times calculator")
    parser.add_argument("--date", help="Day to compute (YYYY-MM-DD, default today)")
    parser.add_argument("--lat", type=float, help="Latitude for an ad-hoc location or --set-location")
    parser.add_argument("--lng", type=float, help="Longitude for an ad-hoc location or --set-location")
    parser.add_argument("--elevation", type=float, help="Elevation in meters")
    parser.add_argument("--tz", help="IANA time zone (default: local)")
    parser.add_argument("--format", choices=TIME_FORMATS, help="Output time format")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--list-methods", action="store_true", help="List calculation methods")
    parser.add_argument("--list-locations", action="store_true", help="List locations from config")
    parser.add_argument("--set-location", help="Add or update a location and set it active")
    parser.add_argument("--use-location", help="Switch current location")
    parser.add_argument("--set-method", help="Set calculation method")
    parser.add_argument("--set-asr", choices=sorted(ASR_FACTORS), help="Set Asr juristic method")
    parser.add_argument("--set-high-lats", choices=HIGH_LAT_METHODS, help="Set high latitude adjustment")
    parser.add_argument("--set-format", choices=TIME_FORMATS, help="Set default time format")
    parser.add_argument("--set-offset", nargs=2, metavar=("PRAYER", "MIN"), help="Set prayer offset in minutes")
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return handle_cli(args)
    except (ValueError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
