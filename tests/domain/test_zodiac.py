import math
import unittest

from kundali_core.domain.kundali.zodiac import (
    DASHA_LORDS,
    NAKSHATRA_SPAN,
    NAKSHATRAS,
    SIGNS,
    angular_separation,
    classify,
    nakshatra_for,
    nakshatra_lord_index,
    normalize_degrees,
    sign_for,
    sign_index,
    signed_difference,
)


class TestTables(unittest.TestCase):
    def test_table_sizes_and_ids(self):
        self.assertEqual(len(SIGNS), 12)
        self.assertEqual(len(NAKSHATRAS), 27)
        self.assertEqual([s.id for s in SIGNS], list(range(1, 13)))
        self.assertEqual([n.id for n in NAKSHATRAS], list(range(1, 28)))

    def test_nakshatra_lords_repeat_every_nine(self):
        self.assertEqual(NAKSHATRAS[0].lord, "Ketu")       # Ashwini
        self.assertEqual(NAKSHATRAS[3].lord, "Moon")       # Rohini
        self.assertEqual(NAKSHATRAS[9].lord, "Ketu")       # Magha
        self.assertEqual(NAKSHATRAS[26].lord, "Mercury")   # Revati
        for i, nakshatra in enumerate(NAKSHATRAS):
            self.assertEqual(nakshatra.lord, DASHA_LORDS[nakshatra_lord_index(i)])

    def test_sign_lords(self):
        self.assertEqual(SIGNS[0].lord, "Mars")
        self.assertEqual(SIGNS[4].lord, "Sun")
        self.assertEqual(SIGNS[11].sanskrit, "Meena")


class TestAngles(unittest.TestCase):
    def test_normalize(self):
        self.assertEqual(normalize_degrees(360.0), 0.0)
        self.assertAlmostEqual(normalize_degrees(-10.0), 350.0)
        self.assertAlmostEqual(normalize_degrees(725.5), 5.5)
        self.assertLess(normalize_degrees(-1e-17), 360.0)

    def test_normalize_rejects_non_finite(self):
        with self.assertRaises(ValueError):
            normalize_degrees(math.nan)
        with self.assertRaises(ValueError):
            normalize_degrees(math.inf)

    def test_angular_separation_wraps(self):
        self.assertAlmostEqual(angular_separation(350.0, 10.0), 20.0)
        self.assertAlmostEqual(angular_separation(10.0, 350.0), 20.0)
        self.assertAlmostEqual(angular_separation(0.0, 180.0), 180.0)
        self.assertAlmostEqual(angular_separation(100.0, 105.0), 5.0)

    def test_signed_difference(self):
        self.assertAlmostEqual(signed_difference(1.0, 359.0), 2.0)
        self.assertAlmostEqual(signed_difference(359.0, 1.0), -2.0)
        self.assertAlmostEqual(signed_difference(180.0, 0.0), 180.0)


class TestClassifier(unittest.TestCase):
    def test_start_of_zodiac(self):
        placement = classify(0.0)
        self.assertEqual(placement.sign.name, "Aries")
        self.assertEqual(placement.nakshatra.name, "Ashwini")
        self.assertEqual(placement.pada, 1)
        self.assertEqual(placement.local_degree, 0.0)

    def test_end_of_zodiac(self):
        placement = classify(359.999)
        self.assertEqual(placement.sign.name, "Pisces")
        self.assertEqual(placement.nakshatra.name, "Revati")
        self.assertEqual(placement.pada, 4)

    def test_nakshatra_boundary(self):
        self.assertEqual(nakshatra_for(NAKSHATRA_SPAN).name, "Bharani")
        self.assertEqual(nakshatra_for(NAKSHATRA_SPAN - 1e-9).name, "Ashwini")

    def test_negative_longitude_is_normalized(self):
        self.assertEqual(sign_for(-10.0).name, "Pisces")
        self.assertEqual(sign_index(-10.0), 11)

    def test_sweep(self):
        for step in range(3600):
            lon = step / 10.0
            placement = classify(lon)

            self.assertEqual(placement.sign.id, math.floor(lon / 30) + 1)
            self.assertTrue(0 <= placement.local_degree < 30)
            self.assertTrue(1 <= placement.pada <= 4)
            self.assertTrue(0 <= placement.degree_in_nakshatra < NAKSHATRA_SPAN)
            self.assertEqual(
                placement.nakshatra.lord,
                DASHA_LORDS[(placement.nakshatra.id - 1) % 9],
            )
            # Idempotent
            self.assertEqual(classify(placement.longitude), placement)


if __name__ == "__main__":
    unittest.main()
