import unittest

from kundali_core.domain.kundali.calculator import build_position
from kundali_core.domain.kundali.derived.house_calculator import HouseCalculator
from kundali_core.domain.kundali.ephemeris import BODIES, body_by_name
from kundali_core.domain.kundali.schemas import AscendantInfo
from kundali_core.domain.kundali.zodiac import classify


def make_ascendant(longitude: float) -> AscendantInfo:
    placement = classify(longitude)
    return AscendantInfo(
        sign=placement.sign,
        degree=placement.local_degree,
        absolute_degree=placement.longitude,
        tropical_degree=longitude,
        nakshatra=placement.nakshatra,
        pada=placement.pada,
    )


def make_planet(name: str, longitude: float):
    return build_position(body_by_name(name), longitude, longitude)


class TestHouseCalculator(unittest.TestCase):
    def setUp(self):
        self.calculator = HouseCalculator()

    def test_house_number(self):
        self.assertEqual(self.calculator.house_number(0, 0), 1)
        self.assertEqual(self.calculator.house_number(6, 0), 7)
        self.assertEqual(self.calculator.house_number(11, 0), 12)
        self.assertEqual(self.calculator.house_number(0, 1), 12)
        self.assertEqual(self.calculator.house_number(3, 9), 7)

    def test_only_sign_matters(self):
        ascendant = make_ascendant(29.9)  # late Aries
        early = make_planet("Mars", 0.1)
        late = make_planet("Venus", 29.99)
        self.assertEqual(self.calculator.house_of(early, ascendant), 1)
        self.assertEqual(self.calculator.house_of(late, ascendant), 1)

    def test_twelve_houses_partition_planets(self):
        ascendant = make_ascendant(95.0)  # Cancer
        longitudes = [10.0, 100.0, 130.0, 200.0, 250.0, 280.0, 355.0, 45.0, 225.0]
        planets = [make_planet(body.name, lon) for body, lon in zip(BODIES, longitudes)]

        houses = self.calculator.calculate(ascendant, planets)

        self.assertEqual([h.number for h in houses], list(range(1, 13)))
        self.assertEqual(houses[0].sign.name, "Cancer")
        self.assertEqual(houses[0].cusp_degree, 90.0)
        self.assertEqual(houses[9].sign.name, "Aries")
        self.assertEqual(houses[9].cusp_degree, 0.0)

        placed = [name for house in houses for name in house.planets]
        self.assertEqual(sorted(placed), sorted(p.name for p in planets))
        self.assertIn("Moon", houses[0].planets)
        self.assertIn("Sun", houses[9].planets)


if __name__ == "__main__":
    unittest.main()
