import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import swisseph as swe

from jyotish.config import Settings
from jyotish.domain.kundali.constants import CelestialBody
from jyotish.domain.kundali.errors import OracleFailure, UnsupportedAyanamsaError
from jyotish.ephemeris.oracle import CalculationFlag, CoordinateSystem
from jyotish.ephemeris.swiss import EphemerisContext, SwissEphemerisOracle

J2000 = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)
J2000_JD = 2451545.0

CALC_RESULT = ((280.5, 0.0002, 0.983, 1.019, 0.00001, 0.0000002), swe.FLG_SWIEPH | swe.FLG_SPEED)


class TestEphemerisContext(unittest.TestCase):
    @patch.object(swe, "set_ephe_path")
    def test_initializes_once(self, mock_set_path):
        context = EphemerisContext("/data/ephe")

        self.assertFalse(context.initialized)
        self.assertTrue(context.initialize())
        self.assertFalse(context.initialize())
        self.assertTrue(context.initialized)
        mock_set_path.assert_called_once_with("/data/ephe")

    @patch.object(swe, "set_ephe_path")
    def test_without_path(self, mock_set_path):
        context = EphemerisContext()

        self.assertTrue(context.initialize())
        mock_set_path.assert_not_called()


class TestSwissEphemerisOracle(unittest.TestCase):
    def setUp(self):
        self.context = EphemerisContext()
        self.oracle = SwissEphemerisOracle(self.context, ayanamsa="Lahiri")

    def test_ayanamsa_name(self):
        self.assertEqual(self.oracle.ayanamsa_name, "Lahiri")

    def test_from_settings(self):
        oracle = SwissEphemerisOracle.from_settings(
            Settings(EPHEMERIS_PATH="/data/ephe", AYANAMSA="Raman")
        )

        self.assertEqual(oracle.ayanamsa_name, "Raman")
        self.assertEqual(oracle.sidereal_mode, swe.SIDM_RAMAN)
        self.assertEqual(oracle.context.ephemeris_path, "/data/ephe")
        self.assertFalse(oracle.context.initialized)

    def test_from_settings_rejects_unknown_ayanamsa(self):
        with self.assertRaises(UnsupportedAyanamsaError):
            SwissEphemerisOracle.from_settings(Settings(AYANAMSA="Galactic Centre"))

    def test_unsupported_ayanamsa(self):
        with self.assertRaises(UnsupportedAyanamsaError):
            SwissEphemerisOracle(self.context, ayanamsa="Galactic Centre")

    @patch.object(swe, "calc_ut", return_value=CALC_RESULT)
    def test_position(self, mock_calc):
        coords = self.oracle.position(J2000, CelestialBody.SUN, CoordinateSystem.SIDEREAL)

        self.assertEqual(coords.longitude, 280.5)
        self.assertEqual(coords.latitude, 0.0002)
        self.assertEqual(coords.distance, 0.983)
        self.assertEqual(coords.speed_longitude, 1.019)
        self.assertTrue(self.context.initialized)

        jd, body_id, iflag = mock_calc.call_args[0]
        self.assertAlmostEqual(jd, J2000_JD)
        self.assertEqual(body_id, swe.SUN)
        self.assertEqual(iflag, swe.FLG_SIDEREAL | swe.FLG_SPEED)

    @patch.object(swe, "calc_ut", return_value=CALC_RESULT)
    def test_tropical_flags(self, mock_calc):
        self.oracle.position(
            J2000,
            CelestialBody.MARS,
            CoordinateSystem.TROPICAL,
            flags=(CalculationFlag.SPEED, CalculationFlag.TOPOCENTRIC),
        )

        _, body_id, iflag = mock_calc.call_args[0]
        self.assertEqual(body_id, swe.MARS)
        self.assertEqual(iflag, swe.FLG_SPEED | swe.FLG_TOPOCTR)

    @patch.object(swe, "calc_ut", return_value=CALC_RESULT)
    def test_rahu_is_mean_node(self, mock_calc):
        self.oracle.position(J2000, CelestialBody.RAHU, CoordinateSystem.SIDEREAL)

        self.assertEqual(mock_calc.call_args[0][1], swe.MEAN_NODE)

    @patch.object(swe, "calc_ut", return_value=CALC_RESULT)
    def test_non_utc_instant(self, mock_calc):
        local = J2000.astimezone(timezone(timedelta(hours=5, minutes=30)))
        self.oracle.position(local, CelestialBody.SUN, CoordinateSystem.SIDEREAL)

        self.assertAlmostEqual(mock_calc.call_args[0][0], J2000_JD)

    def test_ketu_is_not_queried(self):
        with self.assertRaises(ValueError):
            self.oracle.position(J2000, CelestialBody.KETU, CoordinateSystem.SIDEREAL)

    @patch.object(swe, "calc_ut", side_effect=swe.Error("SE1 file not found"))
    def test_swiss_error_becomes_oracle_failure(self, mock_calc):
        with self.assertLogs("jyotish.ephemeris.swiss", level="ERROR"):
            with self.assertRaises(OracleFailure) as ctx:
                self.oracle.position(J2000, CelestialBody.MOON, CoordinateSystem.SIDEREAL)

        self.assertEqual(ctx.exception.code, -1)
        self.assertEqual(ctx.exception.message, "SE1 file not found")

    @patch.object(swe, "calc_ut", return_value=((0.0,) * 6, -1))
    def test_negative_status_becomes_oracle_failure(self, mock_calc):
        with self.assertRaises(OracleFailure) as ctx:
            self.oracle.position(J2000, CelestialBody.MOON, CoordinateSystem.SIDEREAL)

        self.assertEqual(ctx.exception.code, -1)

    @patch.object(swe, "houses_ex")
    def test_houses(self, mock_houses):
        cusps = tuple(float(30 * i + 7) for i in range(12))
        mock_houses.return_value = (cusps, (7.0, 277.0, 0.0, 0.0))

        result = self.oracle.houses(J2000, 28.6, 77.2, "P", CoordinateSystem.SIDEREAL)

        self.assertEqual(result.cusps, cusps)
        self.assertEqual(result.ascendant, 7.0)
        self.assertEqual(result.midheaven, 277.0)
        args = mock_houses.call_args[0]
        self.assertEqual(args[1:4], (28.6, 77.2, b"P"))
        self.assertEqual(args[4], swe.FLG_SIDEREAL)

    @patch.object(swe, "get_ayanamsa_ut", return_value=23.85)
    def test_ayanamsa(self, mock_ayanamsa):
        self.assertEqual(self.oracle.ayanamsa(J2000), 23.85)
        self.assertAlmostEqual(mock_ayanamsa.call_args[0][0], J2000_JD)


if __name__ == "__main__":
    unittest.main()
