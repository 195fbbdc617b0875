import unittest
from datetime import datetime, timezone
from unittest.mock import patch

import swisseph as swe

from kundali_core.domain.kundali.calculator import KundaliCalculator
from kundali_core.domain.kundali.ephemeris import (
    BODIES,
    NODE_SPEED,
    EphemerisProvider,
    RawBodyPosition,
    body_by_name,
)
from kundali_core.domain.kundali.errors import ComputationError, EphemerisRangeError
from kundali_core.domain.kundali.zodiac import angular_separation

J2000_NOON = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)


class TestEphemerisProvider(unittest.TestCase):
    def setUp(self):
        self.provider = EphemerisProvider(ephe_path="")

    def test_sun_at_j2000(self):
        positions = self.provider.body_positions(J2000_NOON)
        sun = positions[0]

        self.assertEqual(sun.body.name, "Sun")
        self.assertAlmostEqual(sun.longitude, 280.37, delta=0.05)
        self.assertEqual(sun.distance, 0.0)
        self.assertFalse(sun.is_retrograde)

    def test_seven_classical_bodies_in_order(self):
        positions = self.provider.body_positions(J2000_NOON)
        self.assertEqual(
            [p.body.name for p in positions],
            ["Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn"],
        )
        for p in positions:
            self.assertTrue(0 <= p.longitude < 360)

    def test_moon_speed(self):
        moon = self.provider.body_positions(J2000_NOON)[1]
        self.assertTrue(11.0 < moon.speed < 16.0)

    def test_nodes_are_opposite_and_retrograde(self):
        rahu, ketu = self.provider.lunar_nodes(J2000_NOON)

        self.assertAlmostEqual(rahu.longitude, 125.04452, places=6)
        self.assertAlmostEqual(angular_separation(rahu.longitude, ketu.longitude), 180.0)
        self.assertEqual(rahu.speed, NODE_SPEED)
        self.assertTrue(rahu.is_retrograde)
        self.assertTrue(ketu.is_retrograde)

    def test_all_positions(self):
        positions = self.provider.all_positions(J2000_NOON)
        self.assertEqual([p.body for p in positions], list(BODIES))

    def test_out_of_range_year(self):
        provider = EphemerisProvider(ephe_path="", min_year=1900, max_year=2100)

        with self.assertRaises(EphemerisRangeError):
            provider.body_positions(datetime(1850, 1, 1, tzinfo=timezone.utc))
        with self.assertRaises(ComputationError):
            provider.lunar_nodes(datetime(2150, 1, 1, tzinfo=timezone.utc))

    def test_swisseph_error_is_wrapped(self):
        with patch(
            "kundali_core.domain.kundali.ephemeris.swe.calc_ut",
            side_effect=swe.Error("boom"),
        ):
            with self.assertRaises(EphemerisRangeError) as ctx:
                self.provider.body_positions(J2000_NOON)

        self.assertIsInstance(ctx.exception.__cause__, swe.Error)

    def test_body_lookup(self):
        self.assertEqual(body_by_name("Rahu").full_name, "Rahu (North Node)")
        with self.assertRaises(KeyError):
            body_by_name("Pluto")

    def test_raw_position_retrograde_flag(self):
        raw = RawBodyPosition(
            body=body_by_name("Mercury"), longitude=10.0, latitude=0.0, distance=0.4, speed=-0.5,
        )
        self.assertTrue(raw.is_retrograde)


class TestKundaliCalculator(unittest.TestCase):
    def setUp(self):
        self.calculator = KundaliCalculator(ephemeris=EphemerisProvider(ephe_path=""))

    def test_sidereal_equals_tropical_minus_ayanamsa(self):
        result = self.calculator.calculate(J2000_NOON, 28.61, 77.21)

        self.assertAlmostEqual(result["ayanamsa"], 23.8531)
        for planet in result["planets"]:
            expected = (planet.tropical_longitude - result["ayanamsa"]) % 360.0
            self.assertAlmostEqual(planet.sidereal_longitude, expected, places=9)
            self.assertEqual(planet.nakshatra_lord, planet.nakshatra.lord)
            self.assertEqual(planet.is_retrograde, planet.speed < 0)

    def test_nine_planets(self):
        planets = self.calculator.calculate_planets(J2000_NOON)
        self.assertEqual(len(planets), 9)
        self.assertEqual(planets[-1].name, "Ketu")


if __name__ == "__main__":
    unittest.main()
