from abc import ABC, abstractmethod
from typing import Dict, Sequence

from kundali_core.config import settings
from kundali_core.domain.kundali.divisional.schemas import DivisionalChart, NavamsaPosition
from kundali_core.domain.kundali.schemas import AscendantInfo, PlanetPosition


class BaseDivisionalCalculator(ABC):
    """
    Abstract base class for divisional chart calculators.

    Subclasses must:
    - Set `chart_type`
    - Implement `position` for a single sidereal longitude
    """

    chart_type: str

    def __init__(self, calculation_version: str | None = None):
        self.calculation_version = calculation_version or settings.CALCULATION_VERSION

    @abstractmethod
    def position(self, longitude: float) -> NavamsaPosition:
        """
        Place one sidereal longitude in this divisional chart.
        """
        raise NotImplementedError

    def calculate(
        self,
        ascendant: AscendantInfo,
        planets: Sequence[PlanetPosition],
    ) -> DivisionalChart:
        """
        Calculate the divisional chart from D1 positions.
        """
        placed: Dict[str, NavamsaPosition] = {
            planet.name: self.position(planet.sidereal_longitude)
            for planet in planets
        }

        return self._build_chart(
            ascendant=self.position(ascendant.absolute_degree),
            planets=placed,
        )

    # ─────────────────────────────────────────────
    # Shared helpers
    # ─────────────────────────────────────────────

    def _build_chart(
        self,
        ascendant: NavamsaPosition,
        planets: Dict[str, NavamsaPosition],
    ) -> DivisionalChart:
        return DivisionalChart(
            chart_type=self.chart_type,
            ascendant=ascendant,
            planets=planets,
            calculation_version=self.calculation_version,
        )
