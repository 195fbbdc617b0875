import logging
import math
from datetime import datetime
from typing import Optional

from kundali_core.config import settings
from kundali_core.domain.kundali.ayanamsa import lahiri_ayanamsa, tropical_to_sidereal
from kundali_core.domain.kundali.errors import PolarLatitudeError
from kundali_core.domain.kundali.schemas import AscendantInfo
from kundali_core.domain.kundali.timescale import julian_day, local_sidereal_time
from kundali_core.domain.kundali.zodiac import classify, normalize_degrees

logger = logging.getLogger(__name__)

# Fixed, not corrected for date
OBLIQUITY = 23.4397


class AscendantCalculator:
    """
    Derives the sidereal rising point for an instant and location.
    """

    def __init__(self, polar_latitude_limit: Optional[float] = None):
        self.polar_latitude_limit = (
            polar_latitude_limit
            if polar_latitude_limit is not None
            else settings.POLAR_LATITUDE_LIMIT
        )

    def calculate(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
    ) -> AscendantInfo:
        """
        Calculate ascendant sign, degree and nakshatra.
        """
        if abs(latitude) > self.polar_latitude_limit:
            raise PolarLatitudeError(
                f"Ascendant is undefined at latitude {latitude}; "
                f"supported up to ±{self.polar_latitude_limit}°"
            )

        jd = julian_day(instant)
        ayanamsa = lahiri_ayanamsa(jd)
        lst = local_sidereal_time(jd, longitude)

        tropical = self.tropical_ascendant(lst, latitude)
        sidereal = tropical_to_sidereal(tropical, ayanamsa)

        logger.debug(
            "Ascendant: JD %.6f ayanamsa %.4f° LST %.4f° tropical %.4f° sidereal %.4f°",
            jd, ayanamsa, lst, tropical, sidereal,
        )

        placement = classify(sidereal)

        return AscendantInfo(
            sign=placement.sign,
            degree=placement.local_degree,
            absolute_degree=placement.longitude,
            tropical_degree=tropical,
            nakshatra=placement.nakshatra,
            pada=placement.pada,
        )

    def tropical_ascendant(self, lst_degrees: float, latitude: float) -> float:
        """
        Ecliptic longitude rising in the east for a local sidereal time.

        asc = atan2(cos(LST), -(sin(LST)·cos(ε) + tan(φ)·sin(ε)))
        """
        lst = math.radians(lst_degrees)
        eps = math.radians(OBLIQUITY)
        phi = math.radians(latitude)

        asc = math.degrees(
            math.atan2(
                math.cos(lst),
                -(math.sin(lst) * math.cos(eps) + math.tan(phi) * math.sin(eps)),
            )
        )

        if not math.isfinite(asc):
            raise PolarLatitudeError(
                f"Ascendant formula diverged at latitude {latitude}"
            )

        return normalize_degrees(asc)
