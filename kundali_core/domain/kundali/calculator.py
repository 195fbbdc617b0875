import logging
from datetime import datetime
from typing import Dict, List, Optional

from kundali_core.domain.kundali.ascendant import AscendantCalculator
from kundali_core.domain.kundali.ayanamsa import lahiri_ayanamsa, tropical_to_sidereal
from kundali_core.domain.kundali.ephemeris import EphemerisProvider, RawBodyPosition
from kundali_core.domain.kundali.schemas import PlanetPosition
from kundali_core.domain.kundali.timescale import julian_day
from kundali_core.domain.kundali.zodiac import Body, classify

logger = logging.getLogger(__name__)


def build_position(
    body: Body,
    tropical_longitude: float,
    sidereal_longitude: float,
    latitude: float = 0.0,
    distance: float = 0.0,
    speed: float = 0.0,
) -> PlanetPosition:
    """
    Classify one body's sidereal longitude into a PlanetPosition.
    """
    placement = classify(sidereal_longitude)

    return PlanetPosition(
        body=body,
        name=body.name,
        full_name=body.full_name,
        tropical_longitude=tropical_longitude,
        sidereal_longitude=placement.longitude,
        latitude=latitude,
        distance=distance,
        speed=speed,
        is_retrograde=speed < 0,
        sign=placement.sign,
        local_degree=placement.local_degree,
        nakshatra=placement.nakshatra,
        pada=placement.pada,
        nakshatra_lord=placement.nakshatra.lord,
        degree_in_nakshatra=placement.degree_in_nakshatra,
    )


class KundaliCalculator:
    """
    Astronomical calculator for kundali generation.

    This class:
    - Converts a UTC instant and location into sidereal positions
    - Applies the ayanamsa once, to bodies and ascendant alike
    - Returns raw, structured data consumed by KundaliEngine
    """

    def __init__(
        self,
        ephemeris: Optional[EphemerisProvider] = None,
        ascendant_calculator: Optional[AscendantCalculator] = None,
    ):
        self.ephemeris = ephemeris or EphemerisProvider()
        self.ascendant_calculator = ascendant_calculator or AscendantCalculator()

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def calculate(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
    ) -> Dict:
        """
        Calculate core astronomical data for a chart.

        Returns a normalized dict consumed by KundaliEngine.
        """

        # Step 1: Julian Day & ayanamsa
        jd = julian_day(instant)
        ayanamsa = lahiri_ayanamsa(jd)

        # Step 2: Planetary positions (fails first if out of range)
        planets = self.calculate_planets(instant)

        # Step 3: Ascendant
        ascendant = self.ascendant_calculator.calculate(instant, latitude, longitude)

        return {
            "julian_day": jd,
            "ayanamsa": ayanamsa,
            "ascendant": ascendant,
            "planets": planets,
        }

    def calculate_planets(self, instant: datetime) -> List[PlanetPosition]:
        """
        Sidereal positions of all nine bodies, in chart order.
        """
        ayanamsa = lahiri_ayanamsa(julian_day(instant))

        return [
            self._to_sidereal(raw, ayanamsa)
            for raw in self.ephemeris.all_positions(instant)
        ]

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _to_sidereal(self, raw: RawBodyPosition, ayanamsa: float) -> PlanetPosition:
        sidereal = tropical_to_sidereal(raw.longitude, ayanamsa)
        logger.debug("%s sidereal %.4f°", raw.body.name, sidereal)

        return build_position(
            body=raw.body,
            tropical_longitude=raw.longitude,
            sidereal_longitude=sidereal,
            latitude=raw.latitude,
            distance=raw.distance,
            speed=raw.speed,
        )
