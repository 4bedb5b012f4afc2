from datetime import date, datetime, tzinfo as TzInfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def get_timezone(tz_name):
    if tz_name:
        try:
            return ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {tz_name}") from None
    return datetime.now().astimezone().tzinfo


def gmt_offset(day, tzinfo=None):
    """UTC offset in hours at local noon of ``day``.

    Without ``tzinfo`` the host's local zone is used.
    """
    noon = datetime(day.year, day.month, day.day, 12, 0, 0)
    if tzinfo is None:
        offset = noon.astimezone().utcoffset()
    else:
        offset = noon.replace(tzinfo=tzinfo).utcoffset()
    return offset.total_seconds() / 3600.0 if offset else 0.0


def standard_offset(year, tzinfo=None):
    return min(gmt_offset(date(year, 1, 1), tzinfo), gmt_offset(date(year, 7, 1), tzinfo))


def dst_offset(day, tzinfo=None):
    return gmt_offset(day, tzinfo) - standard_offset(day.year, tzinfo)


def resolve_tzinfo(value):
    """Return a tzinfo for an IANA name or tzinfo, ``None`` for anything else."""
    if isinstance(value, TzInfo):
        return value
    if isinstance(value, str) and value != "auto":
        return get_timezone(value)
    return None
