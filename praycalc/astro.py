import math

J2000 = 2451545.0


def dtr(d):
    return (d * math.pi) / 180.0


def rtd(r):
    return (r * 180.0) / math.pi


def dsin(d):
    return math.sin(dtr(d))


def dcos(d):
    return math.cos(dtr(d))


def dtan(d):
    return math.tan(dtr(d))


def darcsin(x):
    return rtd(math.asin(x))


def darccos(x):
    return rtd(math.acos(x))


def darctan(x):
    return rtd(math.atan(x))


def darccot(x):
    if x == 0:
        return 90.0
    return rtd(math.atan(1.0 / x))


def darctan2(y, x):
    return rtd(math.atan2(y, x))


def fix(a, b):
    """Wrap ``a`` into ``[0, b)``. NaN and infinities are returned as is."""
    if not math.isfinite(a):
        return a
    a = a - b * math.floor(a / b)
    if a < 0:
        a += b
    if a >= b:
        a -= b
    return a


def fix_angle(a):
    return fix(a, 360.0)


def fix_hour(h):
    return fix(h, 24.0)


def time_diff(time1, time2):
    return fix_hour(time2 - time1)


def julian_day(y, m, d):
    if m <= 2:
        y -= 1
        m += 12
    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + d + b - 1524.5


def sun_position(jd):
    """Return ``(declination, equation_of_time)`` for a Julian date.

    Declination is in degrees, the equation of time in hours.
    """
    d = jd - J2000
    g = fix_angle(357.529 + 0.98560028 * d)
    q = fix_angle(280.459 + 0.98564736 * d)
    L = fix_angle(q + 1.915 * dsin(g) + 0.020 * dsin(2 * g))
    e = 23.439 - 0.00000036 * d
    ra = fix_hour(darctan2(dcos(e) * dsin(L), dcos(L)) / 15.0)
    eqt = q / 15.0 - ra
    decl = darcsin(dsin(e) * dsin(L))
    return decl, eqt


def mid_day(jd):
    _, eqt = sun_position(jd)
    return fix_hour(12 - eqt)


def sun_angle_time(angle, jd, lat, direction="cw"):
    """Time (hours) at which the sun is ``angle`` degrees below the horizon.

    ``direction`` is ``"ccw"`` for the event before solar noon and ``"cw"``
    for the one after it. Returns NaN when the sun never reaches the angle on
    that day.
    """
    decl, _ = sun_position(jd)
    noon = mid_day(jd)
    numerator = -dsin(angle) - dsin(decl) * dsin(lat)
    denominator = dcos(decl) * dcos(lat)
    if denominator == 0:
        return math.nan
    x = numerator / denominator
    if not math.isfinite(x) or abs(x) > 1:
        return math.nan
    t = darccos(x) / 15.0
    return noon - t if direction == "ccw" else noon + t


def asr_angle(factor, jd, lat):
    decl, _ = sun_position(jd)
    return -darccot(factor + dtan(abs(lat - decl)))


def rise_set_angle(elevation=0):
    # refraction plus dip of the horizon
    return 0.833 + 0.0347 * math.sqrt(max(elevation, 0))
