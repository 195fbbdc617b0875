import unittest
from unittest.mock import patch

from kundali_core.config import settings
from kundali_core.domain.kundali.calculator import build_position
from kundali_core.domain.kundali.divisional.d9 import D9Calculator
from kundali_core.domain.kundali.ephemeris import body_by_name
from kundali_core.domain.kundali.schemas import AscendantInfo
from kundali_core.domain.kundali.zodiac import classify


class TestParashariNavamsa(unittest.TestCase):
    def setUp(self):
        self.calculator = D9Calculator(convention="parashari")

    def test_first_navamsa_of_each_element(self):
        # Movable signs start from themselves, fixed from the 9th, dual from the 5th
        self.assertEqual(self.calculator.navamsa_position(0.0).sign.name, "Aries")
        self.assertEqual(self.calculator.navamsa_position(30.0).sign.name, "Capricorn")
        self.assertEqual(self.calculator.navamsa_position(60.0).sign.name, "Libra")
        self.assertEqual(self.calculator.navamsa_position(90.0).sign.name, "Cancer")

    def test_progression_within_sign(self):
        self.assertEqual(self.calculator.navamsa_position(3.4).sign.name, "Taurus")
        self.assertEqual(self.calculator.navamsa_position(29.9).sign.name, "Sagittarius")

    def test_degree(self):
        position = self.calculator.navamsa_position(1.0)
        self.assertAlmostEqual(position.degree, 9.0)
        self.assertAlmostEqual(position.absolute_degree, 9.0)

        position = self.calculator.navamsa_position(31.0)  # Taurus 1°
        self.assertAlmostEqual(position.degree, 9.0)
        self.assertAlmostEqual(position.absolute_degree, 279.0)

    def test_vargottama(self):
        self.assertTrue(self.calculator.is_vargottama(1.0))      # Aries in Aries
        self.assertTrue(self.calculator.is_vargottama(45.0))     # Taurus, 5th navamsa
        self.assertFalse(self.calculator.is_vargottama(31.0))

    def test_every_longitude_in_range(self):
        for step in range(720):
            position = self.calculator.navamsa_position(step / 2.0)
            self.assertTrue(0 <= position.degree < 30)
            self.assertTrue(0 <= position.absolute_degree < 360)


class TestLegacyOffsetNavamsa(unittest.TestCase):
    def setUp(self):
        self.calculator = D9Calculator(convention="legacy_offset")

    def test_even_index_unchanged(self):
        self.assertEqual(self.calculator.navamsa_position(0.0).sign.name, "Aries")
        self.assertEqual(self.calculator.navamsa_position(60.0).sign.name, "Libra")

    def test_odd_index_offset_by_eight(self):
        self.assertEqual(self.calculator.navamsa_position(30.0).sign.name, "Virgo")
        self.assertEqual(self.calculator.navamsa_position(90.0).sign.name, "Pisces")


class TestD9Chart(unittest.TestCase):
    def test_chart(self):
        placement = classify(31.0)
        ascendant = AscendantInfo(
            sign=placement.sign,
            degree=placement.local_degree,
            absolute_degree=placement.longitude,
            tropical_degree=55.0,
            nakshatra=placement.nakshatra,
            pada=placement.pada,
        )
        planets = [
            build_position(body_by_name("Sun"), 1.0, 1.0),
            build_position(body_by_name("Moon"), 45.0, 45.0),
        ]

        chart = D9Calculator(convention="parashari", calculation_version="v9").calculate(
            ascendant, planets
        )

        self.assertEqual(chart.chart_type, "D9")
        self.assertEqual(chart.calculation_version, "v9")
        self.assertEqual(chart.ascendant.sign.name, "Capricorn")
        self.assertEqual(set(chart.planets), {"Sun", "Moon"})
        self.assertEqual(chart.planets["Moon"].sign.name, "Taurus")

    def test_default_convention_offsets_odd_signs(self):
        calculator = D9Calculator()
        self.assertEqual(calculator.convention, "legacy_offset")
        self.assertEqual(calculator.navamsa_position(30.0).sign.name, "Virgo")
        self.assertEqual(calculator.navamsa_position(0.0).sign.name, "Aries")

    def test_convention_from_settings(self):
        with patch.object(settings, "NAVAMSA_CONVENTION", "parashari"):
            calculator = D9Calculator()
        self.assertEqual(calculator.convention, "parashari")

    def test_unknown_convention(self):
        with self.assertRaises(ValueError):
            D9Calculator(convention="kp")


if __name__ == "__main__":
    unittest.main()
