from typing import Literal

from kundali_core.config import settings
from kundali_core.domain.kundali.divisional.base import BaseDivisionalCalculator
from kundali_core.domain.kundali.divisional.schemas import NavamsaPosition
from kundali_core.domain.kundali.zodiac import SIGN_SPAN, SIGNS, normalize_degrees, sign_index

NavamsaConvention = Literal["parashari", "legacy_offset"]

NAVAMSHA_SPAN = SIGN_SPAN / 9  # 3.333333...


class D9Calculator(BaseDivisionalCalculator):
    """
    Calculates the Navamsha (D9) chart.

    Conventions:
    - "parashari": navamsha sign = (sign * 9 + pada) % 12, which gives
      movable signs starting from themselves, fixed signs from the 9th
      and dual signs from the 5th.
    - "legacy_offset" (default): the same index plus 8 when the 0-based sign
      index is odd.
    """

    chart_type = "D9"

    def __init__(
        self,
        convention: NavamsaConvention | None = None,
        calculation_version: str | None = None,
    ):
        super().__init__(calculation_version)
        self.convention = convention or settings.NAVAMSA_CONVENTION
        if self.convention not in ("parashari", "legacy_offset"):
            raise ValueError(f"Unknown navamsa convention: {self.convention}")

    def position(self, longitude: float) -> NavamsaPosition:
        return self.navamsa_position(longitude)

    def navamsa_position(self, longitude: float) -> NavamsaPosition:
        """
        Navamsha sign and degree for a sidereal longitude.
        """
        longitude = normalize_degrees(longitude)
        d1_index = sign_index(longitude)
        degree_in_sign = longitude - d1_index * SIGN_SPAN

        # Which Navamsha within the sign (0–8)
        pada = min(int(degree_in_sign // NAVAMSHA_SPAN), 8)

        d9_index = self._navamsa_sign_index(d1_index, pada)

        # Degree within the Navamsha, stretched to a full sign
        degree = (degree_in_sign - pada * NAVAMSHA_SPAN) * 9
        degree = min(max(degree, 0.0), SIGN_SPAN - 1e-9)

        return NavamsaPosition(
            sign=SIGNS[d9_index],
            degree=degree,
            absolute_degree=d9_index * SIGN_SPAN + degree,
        )

    def is_vargottama(self, longitude: float) -> bool:
        """
        True when D1 and D9 signs coincide.
        """
        return sign_index(normalize_degrees(longitude)) == self.navamsa_position(longitude).sign.id - 1

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _navamsa_sign_index(self, d1_index: int, pada: int) -> int:
        raw = (d1_index * 9 + pada) % 12

        if self.convention == "legacy_offset" and d1_index % 2 == 1:
            return (raw + 8) % 12

        return raw
