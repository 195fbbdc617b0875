from kundali_core.domain.kundali.timescale import julian_centuries
from kundali_core.domain.kundali.zodiac import normalize_degrees

# Lahiri value at J2000.0 (23°51′11″) and annual precession (50.2881″)
AYANAMSA_J2000 = 23.8531
PRECESSION_PER_YEAR = 0.01396894
PRECESSION_QUADRATIC = 0.0001266


def lahiri_ayanamsa(jd: float) -> float:
    """
    Ayanamsa in degrees for a Julian Day.
    """
    t = julian_centuries(jd)
    return (
        AYANAMSA_J2000
        + PRECESSION_PER_YEAR * t * 36525.0 / 365.25
        + PRECESSION_QUADRATIC * t * t
    )


def tropical_to_sidereal(tropical_longitude: float, ayanamsa: float) -> float:
    """
    Convert a tropical longitude to sidereal, normalized to [0, 360).

    This is the only place the tropical/sidereal boundary is crossed.
    """
    return normalize_degrees(tropical_longitude - ayanamsa)
