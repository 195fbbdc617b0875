from typing import Dict

from pydantic import BaseModel, ConfigDict

from kundali_core.domain.kundali.zodiac import Sign


class NavamsaPosition(BaseModel):
    """
    A point placed in a divisional chart.
    """
    model_config = ConfigDict(frozen=True)

    sign: Sign
    degree: float
    absolute_degree: float


class DivisionalChart(BaseModel):
    """
    Represents a single divisional chart (D9).
    """
    model_config = ConfigDict(frozen=True)

    chart_type: str
    ascendant: NavamsaPosition
    planets: Dict[str, NavamsaPosition]
    calculation_version: str
