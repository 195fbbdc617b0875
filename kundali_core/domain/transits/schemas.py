from typing import Dict

from pydantic import BaseModel, ConfigDict

from kundali_core.domain.kundali.zodiac import Sign


# ─────────────────────────────────────────────
# Transit Schemas
# ─────────────────────────────────────────────

class TransitPlanet(BaseModel):
    """
    Represents a planet's sidereal transit position at a given time.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    sign: Sign
    degree: float
    longitude: float
    retrograde: bool = False


class TransitChart(BaseModel):
    """
    Represents the sky at one instant.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: str
    planets: Dict[str, TransitPlanet]
    calculation_version: str

    def sign_of(self, name: str) -> Sign:
        return self.planets[name].sign
