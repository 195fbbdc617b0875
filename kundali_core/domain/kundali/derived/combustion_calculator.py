from typing import Dict

from kundali_core.domain.kundali.zodiac import angular_separation


# Maximum distance from the Sun (degrees) at which a planet is combust
COMBUSTION_ORBS: Dict[str, float] = {
    "Moon": 12.0,
    "Mars": 17.0,
    "Mercury": 14.0,
    "Jupiter": 11.0,
    "Venus": 10.0,
    "Saturn": 15.0,
}


class CombustionCalculator:
    """
    Flags planets that are too close to the Sun.
    Sun, Rahu and Ketu are never combust.
    """

    def __init__(self, orbs: Dict[str, float] | None = None):
        self.orbs = orbs if orbs is not None else COMBUSTION_ORBS

    def is_combust(
        self,
        planet_name: str,
        planet_longitude: float,
        sun_longitude: float,
    ) -> bool:
        orb = self.orbs.get(planet_name)
        if orb is None:
            return False

        return angular_separation(planet_longitude, sun_longitude) <= orb
