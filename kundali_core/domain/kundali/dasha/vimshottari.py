import logging
from datetime import datetime, timedelta
from typing import Dict, List, Sequence

from kundali_core.domain.kundali.dasha.schemas import DashaPeriod, VimshottariDasha
from kundali_core.domain.kundali.errors import ComputationError, InvalidBirthDataError
from kundali_core.domain.kundali.timescale import as_utc
from kundali_core.domain.kundali.zodiac import DASHA_LORDS, NAKSHATRA_SPAN, classify

logger = logging.getLogger(__name__)

# Vimshottari period of each lord, in years (sums to 120)
DASHA_YEARS: Dict[str, int] = {
    "Ketu": 7,
    "Venus": 20,
    "Sun": 6,
    "Moon": 10,
    "Mars": 7,
    "Rahu": 18,
    "Jupiter": 16,
    "Saturn": 19,
    "Mercury": 17,
}

TOTAL_YEARS = 120
DAYS_PER_YEAR = 365.25


def years_to_timedelta(years: float) -> timedelta:
    return timedelta(days=years * DAYS_PER_YEAR)


class VimshottariCalculator:
    """
    Vimshottari Dasha engine.

    The Maha-Dasha timeline starts from the lord of the birth Moon's
    nakshatra, with only the unexpired part of that first period left
    at birth. Antar and Pratyantar periods reapply the 120-year wheel
    proportions inside their parent.
    """

    def sequence_from(self, lord: str) -> List[str]:
        """
        The nine dasha lords in wheel order, starting at `lord`.
        """
        if lord not in DASHA_YEARS:
            raise ValueError(f"Unknown dasha lord: {lord}")

        start = DASHA_LORDS.index(lord)
        return [DASHA_LORDS[(start + i) % 9] for i in range(9)]

    def maha_dasha_timeline(
        self,
        birth_instant: datetime,
        moon_longitude: float,
        cycles: int = 1,
    ) -> List[DashaPeriod]:
        """
        All Maha-Dashas from birth, nine per 120-year cycle.

        Only the first period is shortened to the balance at birth.
        """
        if cycles < 1:
            raise ValueError("cycles must be at least 1")

        placement = classify(moon_longitude)
        lord = placement.nakshatra.lord
        balance = self._balance(lord, placement.degree_in_nakshatra)

        sequence = self.sequence_from(lord)

        timeline: List[DashaPeriod] = []
        start = as_utc(birth_instant)

        for cycle in range(cycles):
            for i, planet in enumerate(sequence):
                years = balance if cycle == 0 and i == 0 else float(DASHA_YEARS[planet])
                end = start + years_to_timedelta(years)
                timeline.append(DashaPeriod(planet=planet, start=start, end=end, years=years))
                start = end

        return timeline

    def sub_periods(self, parent: DashaPeriod) -> List[DashaPeriod]:
        """
        Split a period into nine children starting from its own lord.

        Child length = parent years × child lord years / 120. The last
        child ends exactly where the parent ends.
        """
        children: List[DashaPeriod] = []
        start = parent.start
        sequence = self.sequence_from(parent.planet)

        for i, planet in enumerate(sequence):
            years = parent.years * DASHA_YEARS[planet] / TOTAL_YEARS
            end = parent.end if i == len(sequence) - 1 else start + years_to_timedelta(years)
            children.append(DashaPeriod(planet=planet, start=start, end=end, years=years))
            start = end

        return children

    def find_active(
        self,
        periods: Sequence[DashaPeriod],
        instant: datetime,
    ) -> DashaPeriod:
        """
        First period with start <= instant < end.
        """
        instant = as_utc(instant)
        for period in periods:
            if period.start <= instant < period.end:
                return period

        raise ComputationError(
            f"No dasha period covers {instant.isoformat()}"
        )

    def calculate(
        self,
        birth_instant: datetime,
        moon_longitude: float,
        as_of: datetime,
    ) -> VimshottariDasha:
        """
        Full Vimshottari Dasha with the periods active at `as_of`.
        """
        birth_instant = as_utc(birth_instant)
        as_of = as_utc(as_of)

        if as_of < birth_instant:
            raise InvalidBirthDataError(
                f"as_of {as_of.isoformat()} is before birth {birth_instant.isoformat()}"
            )

        # Extend the wheel until it covers the as-of instant
        cycles = 1
        try:
            timeline = self.maha_dasha_timeline(birth_instant, moon_longitude, cycles)
            while timeline[-1].end <= as_of:
                cycles += 1
                timeline = self.maha_dasha_timeline(birth_instant, moon_longitude, cycles)
        except OverflowError as e:
            raise ComputationError(
                f"Dasha timeline cannot reach {as_of.isoformat()}: {e}"
            ) from e

        maha = self.find_active(timeline, as_of)
        antar = self.find_active(self.sub_periods(maha), as_of)
        pratyantar = self.find_active(self.sub_periods(antar), as_of)

        placement = classify(moon_longitude)

        logger.debug(
            "Dasha at %s: %s / %s / %s (%d cycle(s))",
            as_of.isoformat(), maha.planet, antar.planet, pratyantar.planet, cycles,
        )

        return VimshottariDasha(
            birth_moon_nakshatra=placement.nakshatra.id,
            birth_moon_nakshatra_lord=placement.nakshatra.lord,
            birth_moon_degree_in_nakshatra=placement.degree_in_nakshatra,
            balance_at_birth=timeline[0].years,
            maha_dasha=maha,
            antar_dasha=antar,
            pratyantar_dasha=pratyantar,
            all_maha_dashas=tuple(timeline),
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _balance(self, lord: str, degree_in_nakshatra: float) -> float:
        """
        Unexpired years of the first Maha-Dasha at birth.
        """
        return max(0.0, DASHA_YEARS[lord] * (1 - degree_in_nakshatra / NAKSHATRA_SPAN))
