from typing import Dict, List, Sequence

from kundali_core.domain.kundali.schemas import AscendantInfo, House, PlanetPosition
from kundali_core.domain.kundali.zodiac import SIGN_SPAN, SIGNS


class HouseCalculator:
    """
    Whole-Sign houses: house 1 is the ascendant's sign, and every
    following sign is the next house. Only a planet's sign matters.
    """

    def house_number(
        self,
        planet_sign_index: int,
        ascendant_sign_index: int,
    ) -> int:
        """
        House (1–12) of a sign counted from the ascendant sign.
        Both indices are 0-based.
        """
        return ((planet_sign_index - ascendant_sign_index) % 12) + 1

    def house_of(self, planet: PlanetPosition, ascendant: AscendantInfo) -> int:
        return self.house_number(planet.sign.id - 1, ascendant.sign.id - 1)

    def calculate(
        self,
        ascendant: AscendantInfo,
        planets: Sequence[PlanetPosition],
    ) -> List[House]:
        """
        Build all twelve houses with their occupying planets.
        """
        start_index = ascendant.sign.id - 1

        occupants: Dict[int, List[str]] = {number: [] for number in range(1, 13)}
        for planet in planets:
            occupants[self.house_of(planet, ascendant)].append(planet.name)

        houses: List[House] = []
        for i in range(12):
            sign_index = (start_index + i) % 12
            houses.append(
                House(
                    number=i + 1,
                    sign=SIGNS[sign_index],
                    cusp_degree=sign_index * SIGN_SPAN,
                    planets=tuple(occupants[i + 1]),
                )
            )

        return houses
