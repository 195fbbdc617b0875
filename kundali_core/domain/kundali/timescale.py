import math
from datetime import datetime, timezone

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0


def as_utc(instant: datetime) -> datetime:
    """
    Return an aware UTC datetime. Naive values are taken to be UTC already.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def julian_day(instant: datetime) -> float:
    """
    Julian Day of a UTC instant on the proleptic Gregorian calendar.

    Meeus, Astronomical Algorithms, ch. 7: January and February are
    counted as months 13 and 14 of the previous year, and B is the
    Gregorian century correction.
    """
    dt = as_utc(instant)

    year = dt.year
    month = dt.month
    day_fraction = (
        dt.hour
        + dt.minute / 60.0
        + (dt.second + dt.microsecond / 1e6) / 3600.0
    ) / 24.0

    if month <= 2:
        year -= 1
        month += 12

    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + dt.day
        + b
        - 1524.5
        + day_fraction
    )


def julian_centuries(jd: float) -> float:
    """
    Julian centuries since J2000.0.
    """
    return (jd - J2000) / DAYS_PER_CENTURY


def greenwich_mean_sidereal_time(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees [0, 360). Meeus 12.4.
    """
    t = julian_centuries(jd)
    theta = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return theta % 360.0


def local_sidereal_time(jd: float, longitude: float) -> float:
    """
    Local Sidereal Time in degrees: GMST shifted by longitude/15 hours.
    """
    gmst_hours = greenwich_mean_sidereal_time(jd) / 15.0
    lst_hours = gmst_hours + longitude / 15.0
    return (lst_hours * 15.0) % 360.0
