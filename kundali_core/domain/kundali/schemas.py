from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from kundali_core.domain.kundali.dasha.schemas import VimshottariDasha
from kundali_core.domain.kundali.derived.schemas import DoshaAnalysis
from kundali_core.domain.kundali.divisional.schemas import DivisionalChart
from kundali_core.domain.kundali.zodiac import Body, Nakshatra, Sign


# ─────────────────────────────────────────────
# Core Atomic Schemas
# ─────────────────────────────────────────────

class PlanetPosition(BaseModel):
    """
    Represents a single body's classified position at one instant.
    """
    model_config = ConfigDict(frozen=True)

    body: Body
    name: str
    full_name: str
    tropical_longitude: float
    sidereal_longitude: float = Field(ge=0, lt=360)
    latitude: float
    distance: float
    speed: float
    is_retrograde: bool
    sign: Sign
    local_degree: float = Field(ge=0, lt=30)
    nakshatra: Nakshatra
    pada: int = Field(ge=1, le=4)
    nakshatra_lord: str
    degree_in_nakshatra: float


class EnhancedPlanetPosition(PlanetPosition):
    """
    PlanetPosition plus chart-relative and divisional attributes.
    """
    house: int = Field(ge=1, le=12)
    navamsa_sign: Sign
    navamsa_degree: float
    is_vargottama: bool
    is_combust: bool


class AscendantInfo(BaseModel):
    """
    Represents the ascendant (Lagna).
    """
    model_config = ConfigDict(frozen=True)

    sign: Sign
    degree: float
    absolute_degree: float
    tropical_degree: float
    nakshatra: Nakshatra
    pada: int = Field(ge=1, le=4)


class House(BaseModel):
    """
    A Whole-Sign house: exactly one sign, with the bodies it holds.
    """
    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1, le=12)
    sign: Sign
    cusp_degree: float
    planets: Tuple[str, ...] = ()


# ─────────────────────────────────────────────
# Complete Chart
# ─────────────────────────────────────────────

class CompleteBirthChart(BaseModel):
    """
    Everything the engine derives for one birth instant and location.
    """
    model_config = ConfigDict(frozen=True)

    birth_instant: datetime
    latitude: float
    longitude: float
    as_of: datetime
    julian_day: float
    ayanamsa: float

    ascendant: AscendantInfo
    planets: Tuple[EnhancedPlanetPosition, ...]
    houses: Tuple[House, ...]
    navamsa: DivisionalChart
    vimshottari_dasha: VimshottariDasha
    doshas: DoshaAnalysis

    calculation_version: str

    def planet(self, name: str) -> EnhancedPlanetPosition:
        for position in self.planets:
            if position.name == name:
                return position
        raise KeyError(name)
