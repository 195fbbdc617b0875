import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from numbers import Real
from typing import List, Optional

from kundali_core.config import settings
from kundali_core.domain.kundali.calculator import KundaliCalculator
from kundali_core.domain.kundali.dasha.vimshottari import VimshottariCalculator
from kundali_core.domain.kundali.derived.combustion_calculator import CombustionCalculator
from kundali_core.domain.kundali.derived.dosha_calculator import DoshaCalculator
from kundali_core.domain.kundali.derived.house_calculator import HouseCalculator
from kundali_core.domain.kundali.divisional.d9 import D9Calculator
from kundali_core.domain.kundali.divisional.schemas import DivisionalChart
from kundali_core.domain.kundali.errors import InvalidBirthDataError
from kundali_core.domain.kundali.schemas import (
    AscendantInfo,
    CompleteBirthChart,
    EnhancedPlanetPosition,
    PlanetPosition,
)
from kundali_core.domain.kundali.timescale import as_utc
from kundali_core.domain.transits.transit_engine import TransitEngine

logger = logging.getLogger(__name__)


def _coordinate(name: str, value, limit: float) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidBirthDataError(f"{name} must be a number, got {value!r}")

    value = float(value)
    if not math.isfinite(value):
        raise InvalidBirthDataError(f"{name} must be finite, got {value!r}")
    if not -limit <= value <= limit:
        raise InvalidBirthDataError(f"{name} must be within ±{limit:g}°, got {value}")

    return value


@dataclass(frozen=True)
class BirthInstant:
    """
    Immutable birth input used for kundali calculation.

    A naive datetime is taken to be UTC; an aware one is converted.
    """
    instant: datetime
    latitude: float
    longitude: float

    def __post_init__(self):
        if not isinstance(self.instant, datetime):
            raise InvalidBirthDataError(
                f"Birth instant must be a datetime, got {type(self.instant).__name__}"
            )

        object.__setattr__(self, "instant", as_utc(self.instant))
        object.__setattr__(self, "latitude", _coordinate("Latitude", self.latitude, 90.0))
        object.__setattr__(self, "longitude", _coordinate("Longitude", self.longitude, 180.0))

    @classmethod
    def from_iso(cls, text: str, latitude: float, longitude: float) -> "BirthInstant":
        """
        Parse `YYYY-MM-DDTHH:MM:SS`, optionally followed by `Z` or a UTC offset.
        """
        return cls(parse_instant(text), latitude, longitude)


def parse_instant(text: str) -> datetime:
    if not isinstance(text, str) or not text.strip():
        raise InvalidBirthDataError(f"Not a datetime: {text!r}")

    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"

    try:
        return as_utc(datetime.fromisoformat(value))
    except ValueError as e:
        raise InvalidBirthDataError(f"Not an ISO datetime: {text!r}") from e


class KundaliEngine:
    """
    Orchestrates kundali calculation.

    This class:
    - Accepts a validated BirthInstant
    - Delegates each derivation to its calculator
    - Returns one immutable CompleteBirthChart

    Any error propagates to the caller; no partial chart is returned.
    """

    def __init__(
        self,
        calculator: Optional[KundaliCalculator] = None,
        house_calculator: Optional[HouseCalculator] = None,
        d9_calculator: Optional[D9Calculator] = None,
        combustion_calculator: Optional[CombustionCalculator] = None,
        dasha_calculator: Optional[VimshottariCalculator] = None,
        dosha_calculator: Optional[DoshaCalculator] = None,
        transit_engine: Optional[TransitEngine] = None,
    ):
        self.calculator = calculator or KundaliCalculator()
        self.house_calculator = house_calculator or HouseCalculator()
        self.d9_calculator = d9_calculator or D9Calculator()
        self.combustion_calculator = combustion_calculator or CombustionCalculator()
        self.dasha_calculator = dasha_calculator or VimshottariCalculator()
        self.dosha_calculator = dosha_calculator or DoshaCalculator(self.house_calculator)
        self.transit_engine = transit_engine or TransitEngine(self.calculator)

    def generate(
        self,
        birth: BirthInstant,
        as_of: Optional[datetime] = None,
    ) -> CompleteBirthChart:
        """
        Generate the complete chart for a birth, evaluated at `as_of`
        (defaults to now).
        """
        as_of = self._resolve_as_of(birth, as_of)

        logger.info(
            "Computing chart for %s at (%.4f, %.4f), as of %s",
            birth.instant.isoformat(), birth.latitude, birth.longitude, as_of.isoformat(),
        )

        # ─────────────────────────────────────────────
        # Step 1: Raw astronomical calculation
        # ─────────────────────────────────────────────

        raw_result = self.calculator.calculate(
            birth.instant,
            birth.latitude,
            birth.longitude,
        )
        ascendant: AscendantInfo = raw_result["ascendant"]
        planets: List[PlanetPosition] = raw_result["planets"]

        # ─────────────────────────────────────────────
        # Step 2: Houses and Navamsa
        # ─────────────────────────────────────────────

        houses = self.house_calculator.calculate(ascendant, planets)
        navamsa = self.d9_calculator.calculate(ascendant, planets)

        # ─────────────────────────────────────────────
        # Step 3: Enhanced planet positions
        # ─────────────────────────────────────────────

        enhanced = self._enhance(planets, ascendant, navamsa)

        # ─────────────────────────────────────────────
        # Step 4: Dasha timeline
        # ─────────────────────────────────────────────

        moon = self._find(planets, "Moon")
        dasha = self.dasha_calculator.calculate(
            birth.instant,
            moon.sidereal_longitude,
            as_of,
        )

        # ─────────────────────────────────────────────
        # Step 5: Doshas (Sade Sati needs Saturn at as_of)
        # ─────────────────────────────────────────────

        transit = self.transit_engine.calculate(as_of)
        doshas = self.dosha_calculator.calculate(
            planets,
            ascendant,
            transit.sign_of("Saturn"),
            as_of,
        )

        chart = CompleteBirthChart(
            birth_instant=birth.instant,
            latitude=birth.latitude,
            longitude=birth.longitude,
            as_of=as_of,
            julian_day=raw_result["julian_day"],
            ayanamsa=raw_result["ayanamsa"],
            ascendant=ascendant,
            planets=tuple(enhanced),
            houses=tuple(houses),
            navamsa=navamsa,
            vimshottari_dasha=dasha,
            doshas=doshas,
            calculation_version=settings.CALCULATION_VERSION,
        )

        logger.info(
            "Chart ready: ascendant %s, Moon in %s, dasha %s/%s/%s",
            ascendant.sign.name,
            moon.nakshatra.name,
            dasha.maha_dasha.planet,
            dasha.antar_dasha.planet,
            dasha.pratyantar_dasha.planet,
        )

        return chart

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _resolve_as_of(self, birth: BirthInstant, as_of: Optional[datetime]) -> datetime:
        if as_of is None:
            as_of = datetime.now(timezone.utc)
        elif not isinstance(as_of, datetime):
            raise InvalidBirthDataError(
                f"as_of must be a datetime, got {type(as_of).__name__}"
            )

        as_of = as_utc(as_of)
        if as_of < birth.instant:
            raise InvalidBirthDataError(
                f"as_of {as_of.isoformat()} is before birth {birth.instant.isoformat()}"
            )

        # Dasha and transit both need the as-of instant inside the ephemeris range
        self.calculator.ephemeris.check_range(as_of)

        return as_of

    def _enhance(
        self,
        planets: List[PlanetPosition],
        ascendant: AscendantInfo,
        navamsa: DivisionalChart,
    ) -> List[EnhancedPlanetPosition]:
        sun = self._find(planets, "Sun")

        enhanced: List[EnhancedPlanetPosition] = []
        for planet in planets:
            d9 = navamsa.planets[planet.name]
            enhanced.append(
                EnhancedPlanetPosition(
                    **dict(planet),
                    house=self.house_calculator.house_of(planet, ascendant),
                    navamsa_sign=d9.sign,
                    navamsa_degree=d9.absolute_degree,
                    is_vargottama=self.d9_calculator.is_vargottama(planet.sidereal_longitude),
                    is_combust=self.combustion_calculator.is_combust(
                        planet.name,
                        planet.sidereal_longitude,
                        sun.sidereal_longitude,
                    ),
                )
            )

        return enhanced

    @staticmethod
    def _find(planets: List[PlanetPosition], name: str) -> PlanetPosition:
        for planet in planets:
            if planet.name == name:
                return planet
        raise KeyError(name)


def compute(
    birth_instant_utc: datetime,
    latitude: float,
    longitude: float,
    as_of: Optional[datetime] = None,
) -> CompleteBirthChart:
    """
    Compute a complete birth chart.

    Raises InvalidBirthDataError for bad input and ComputationError when
    the ephemeris or ascendant cannot be evaluated.
    """
    birth = BirthInstant(birth_instant_utc, latitude, longitude)
    return KundaliEngine().generate(birth, as_of)
