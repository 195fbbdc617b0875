from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class DashaPeriod(BaseModel):
    """
    One planetary period at any level (Maha, Antar, Pratyantar).
    """
    model_config = ConfigDict(frozen=True)

    planet: str
    start: datetime
    end: datetime
    years: float


class VimshottariDasha(BaseModel):
    """
    Represents the Vimshottari timeline and the periods running at the as-of instant.
    """
    model_config = ConfigDict(frozen=True)

    birth_moon_nakshatra: int = Field(ge=1, le=27)
    birth_moon_nakshatra_lord: str
    birth_moon_degree_in_nakshatra: float
    balance_at_birth: float

    maha_dasha: DashaPeriod
    antar_dasha: DashaPeriod
    pratyantar_dasha: DashaPeriod

    all_maha_dashas: Tuple[DashaPeriod, ...]
