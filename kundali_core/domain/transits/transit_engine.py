import logging
from datetime import datetime
from typing import Dict, Optional

from kundali_core.config import settings
from kundali_core.domain.kundali.calculator import KundaliCalculator
from kundali_core.domain.kundali.timescale import as_utc
from kundali_core.domain.transits.schemas import TransitChart, TransitPlanet

logger = logging.getLogger(__name__)


class TransitEngine:
    """
    Calculates sidereal planetary positions for a given datetime.

    Uses the same ephemeris and ayanamsa as the natal chart, so
    transit and natal signs are directly comparable.
    """

    def __init__(
        self,
        calculator: Optional[KundaliCalculator] = None,
        calculation_version: Optional[str] = None,
    ):
        self.calculator = calculator or KundaliCalculator()
        self.calculation_version = calculation_version or settings.CALCULATION_VERSION

    def calculate(self, timestamp: datetime) -> TransitChart:
        """
        Calculate transit chart for a given datetime.
        """
        timestamp = as_utc(timestamp)

        planets: Dict[str, TransitPlanet] = {}
        for position in self.calculator.calculate_planets(timestamp):
            planets[position.name] = TransitPlanet(
                name=position.name,
                sign=position.sign,
                degree=position.local_degree,
                longitude=position.sidereal_longitude,
                retrograde=position.is_retrograde,
            )

        logger.debug("Transit snapshot at %s: Saturn in %s",
                     timestamp.isoformat(), planets["Saturn"].sign.name)

        return TransitChart(
            timestamp=timestamp.isoformat(),
            planets=planets,
            calculation_version=self.calculation_version,
        )
