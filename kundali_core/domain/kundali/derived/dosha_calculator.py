from datetime import datetime
from typing import Dict, Optional, Sequence

from kundali_core.domain.kundali.derived.house_calculator import HouseCalculator
from kundali_core.domain.kundali.derived.schemas import DoshaAnalysis, DoshaResult, SadeSatiStatus
from kundali_core.domain.kundali.schemas import AscendantInfo, PlanetPosition
from kundali_core.domain.kundali.zodiac import SIGNS, Sign, angular_separation


# Houses (from the ascendant) considered for Mangal Dosha, with severity
MANGAL_DOSHA_SEVERITY: Dict[int, str] = {
    1: "High",
    4: "High",
    2: "Medium",
    7: "Medium",
    12: "Medium",
    8: "Low",
}

MANGAL_HOUSE_EFFECTS: Dict[int, str] = {
    1: "First house - affects personality and health",
    2: "Second house - affects family and wealth",
    4: "Fourth house - affects domestic happiness",
    7: "Seventh house - directly affects marriage partner",
    8: "Eighth house - affects longevity and sudden events",
    12: "Twelfth house - affects expenses and losses",
}

MANGAL_REMEDIES = (
    "Recite Hanuman Chalisa daily",
    "Visit Hanuman temple on Tuesdays",
    "Donate red items on Tuesdays",
    "Wear red coral (after astrological consultation)",
    "Perform Mars remedial measures",
    "Marriage compatibility: Partner should also have Mangal Dosha (cancels out)",
)

KALSARP_REMEDIES = (
    "Visit Kalsarp Dosha temples (Trimbakeshwar, Ujjain)",
    "Perform Rahu-Ketu puja on eclipses",
    "Chant Maha Mrityunjaya Mantra",
    "Donate to serpent temples",
    "Wear Gomed (Hessonite) for Rahu and Cat's Eye for Ketu (after consultation)",
)

PITRA_REMEDIES = (
    "Perform Shraddha and Tarpan rituals for ancestors",
    "Feed Brahmins on Amavasya (new moon)",
    "Donate to charitable causes in ancestors' names",
    "Plant Peepal tree and water it regularly",
    "Recite Gayatri Mantra",
    "Help elderly people and orphans",
)

NODES = {"Rahu", "Ketu"}

# Sun within this many degrees of an afflicting body
PITRA_ORB = 10.0
PITRA_AFFLICTORS = ("Saturn", "Rahu", "Ketu")

# Average time Saturn spends in one sign
SATURN_YEARS_PER_SIGN = 2.5
SADE_SATI_YEARS = 7.5


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        return f"{n}th"
    return f"{n}" + {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def _find(planets: Sequence[PlanetPosition], name: str) -> Optional[PlanetPosition]:
    return next((p for p in planets if p.name == name), None)


class DoshaCalculator:
    """
    Detects major doshas in a kundali.

    Each check is a pure function of already-computed positions:
    - Mangal Dosha
    - Kaal Sarp Dosha
    - Pitra Dosha
    - Sade Sati
    """

    def __init__(self, house_calculator: HouseCalculator | None = None):
        self.house_calculator = house_calculator or HouseCalculator()

    def calculate(
        self,
        planets: Sequence[PlanetPosition],
        ascendant: AscendantInfo,
        transit_saturn_sign: Sign,
        as_of: datetime,
    ) -> DoshaAnalysis:
        """
        Calculate all doshas for a chart.
        """
        mars = _find(planets, "Mars")
        moon = _find(planets, "Moon")
        if mars is None or moon is None:
            raise ValueError("Dosha analysis requires Mars and Moon positions")

        return DoshaAnalysis(
            mangal_dosha=self.calculate_mangal_dosha(mars, ascendant.sign),
            kalsarp_dosha=self.calculate_kalsarp_dosha(planets),
            pitra_dosha=self.calculate_pitra_dosha(planets),
            sade_sati=self.calculate_sade_sati(
                moon_sign_id=moon.sign.id,
                saturn_sign_id=transit_saturn_sign.id,
                as_of=as_of,
            ),
        )

    # ─────────────────────────────────────────────
    # Mangal Dosha
    # ─────────────────────────────────────────────

    def calculate_mangal_dosha(
        self,
        mars: PlanetPosition,
        ascendant_sign: Sign,
    ) -> DoshaResult:
        """
        Mangal Dosha occurs if Mars is placed in
        certain houses from the ascendant.
        """
        house = self.house_calculator.house_number(
            mars.sign.id - 1, ascendant_sign.id - 1
        )

        severity = MANGAL_DOSHA_SEVERITY.get(house)
        if severity is None:
            return DoshaResult(
                has_dosha=False,
                description="No Mangal Dosha present - Mars is well placed",
            )

        return DoshaResult(
            has_dosha=True,
            description=(
                f"Mangal Dosha present - Mars in {_ordinal(house)} house. "
                f"{MANGAL_HOUSE_EFFECTS[house]}"
            ),
            severity=severity,
            remedies=MANGAL_REMEDIES,
        )

    # ─────────────────────────────────────────────
    # Kaal Sarp Dosha
    # ─────────────────────────────────────────────

    def calculate_kalsarp_dosha(
        self,
        planets: Sequence[PlanetPosition],
    ) -> DoshaResult:
        """
        Occurs if every non-node planet lies on the arc running
        from Rahu to Ketu.

        The arc is picked by comparing the node longitudes numerically,
        not by taking the shorter side of the axis.
        """
        rahu = _find(planets, "Rahu")
        ketu = _find(planets, "Ketu")

        if not rahu or not ketu:
            return DoshaResult(
                has_dosha=False,
                description="Cannot determine - Rahu/Ketu positions not available",
            )

        rahu_lon = rahu.sidereal_longitude
        ketu_lon = ketu.sidereal_longitude

        def in_arc(lon: float) -> bool:
            if rahu_lon < ketu_lon:
                return rahu_lon <= lon <= ketu_lon
            return lon >= rahu_lon or lon <= ketu_lon

        others = [p for p in planets if p.name not in NODES]

        if others and all(in_arc(p.sidereal_longitude) for p in others):
            return DoshaResult(
                has_dosha=True,
                description="Kalsarp Dosha present - All planets are hemmed between Rahu and Ketu",
                severity="High",
                remedies=KALSARP_REMEDIES,
            )

        return DoshaResult(
            has_dosha=False,
            description="No Kalsarp Dosha - Planets are distributed on both sides of Rahu-Ketu axis",
        )

    # ─────────────────────────────────────────────
    # Pitra Dosha
    # ─────────────────────────────────────────────

    def calculate_pitra_dosha(
        self,
        planets: Sequence[PlanetPosition],
    ) -> DoshaResult:
        """
        Sun conjunct (within 10°) Saturn, Rahu or Ketu.
        """
        sun = _find(planets, "Sun")
        if not sun:
            return DoshaResult(
                has_dosha=False,
                description="Cannot determine - planetary positions not available",
            )

        reasons = []
        for name in PITRA_AFFLICTORS:
            other = _find(planets, name)
            if other is None:
                continue
            if angular_separation(sun.sidereal_longitude, other.sidereal_longitude) < PITRA_ORB:
                reasons.append(f"Sun conjunct with {name}")

        if reasons:
            return DoshaResult(
                has_dosha=True,
                description=(
                    f"Pitra Dosha present - {', '.join(reasons)}. "
                    "Indicates ancestral karma to be resolved."
                ),
                severity="Medium",
                remedies=PITRA_REMEDIES,
            )

        return DoshaResult(
            has_dosha=False,
            description="No Pitra Dosha detected - Sun is well placed",
        )

    # ─────────────────────────────────────────────
    # Sade Sati
    # ─────────────────────────────────────────────

    def calculate_sade_sati(
        self,
        moon_sign_id: int,
        saturn_sign_id: int,
        as_of: datetime,
    ) -> SadeSatiStatus:
        """
        Sade Sati status from Saturn's sign relative to the natal Moon sign.

        Both sign ids are 1–12.
        """
        moon_sign = SIGNS[(moon_sign_id - 1) % 12]
        saturn_sign = SIGNS[(saturn_sign_id - 1) % 12]

        # House of Saturn from the Moon, 0-based (0 = same sign)
        diff = (saturn_sign.id - moon_sign.id) % 12

        signs = {"moon_sign": moon_sign.name, "saturn_sign": saturn_sign.name}

        if diff == 11:
            return SadeSatiStatus(
                is_active=True,
                description="Sade Sati is active - Rising phase (Saturn in 12th from Moon sign)",
                phase="Rising",
                **signs,
            )
        if diff == 0:
            return SadeSatiStatus(
                is_active=True,
                description=(
                    "Sade Sati is active - Peak phase (Saturn over Moon sign). "
                    "This is the most challenging period."
                ),
                phase="Peak",
                **signs,
            )
        if diff == 1:
            return SadeSatiStatus(
                is_active=True,
                description="Sade Sati is active - Setting phase (Saturn in 2nd from Moon sign)",
                phase="Setting",
                **signs,
            )

        # Signs Saturn still has to cross to reach the 12th from the Moon
        years_to_next = ((11 - diff) % 12) * SATURN_YEARS_PER_SIGN
        start_year = as_of.year + int(years_to_next)
        end_year = int(start_year + SADE_SATI_YEARS)

        return SadeSatiStatus(
            is_active=False,
            description="Sade Sati is not currently active",
            next_period=f"{start_year}-{end_year}",
            **signs,
        )
