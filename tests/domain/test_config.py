import os
import unittest
from unittest.mock import patch

from kundali_core.config import Settings


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        self.assertEqual(settings.NAVAMSA_CONVENTION, "legacy_offset")
        self.assertIsNone(settings.EPHE_PATH)
        self.assertEqual(settings.EPHEMERIS_MAX_YEAR, 2999)
        self.assertEqual(settings.POLAR_LATITUDE_LIMIT, 89.9)

    def test_environment_override(self):
        env = {"NAVAMSA_CONVENTION": "parashari", "POLAR_LATITUDE_LIMIT": "66.5"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        self.assertEqual(settings.NAVAMSA_CONVENTION, "parashari")
        self.assertEqual(settings.POLAR_LATITUDE_LIMIT, 66.5)


if __name__ == "__main__":
    unittest.main()
