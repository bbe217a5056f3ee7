import unittest
from datetime import date, datetime, time, timezone

from chart_fixtures import FakeOracle

from jyotish.config import Settings
from jyotish.domain.kundali.constants import CelestialBody
from jyotish.domain.kundali.derived.schemas import DignityState
from jyotish.domain.kundali.engine import BirthInput
from jyotish.domain.kundali.errors import UnsupportedAyanamsaError
from jyotish.services.report_service import ReportService

BIRTH = BirthInput(date(2000, 1, 1), time(0, 0), 28.6, 77.2, "UTC")
PARTNER = BirthInput(date(2001, 3, 4), time(14, 15), 19.1, 72.9, "Asia/Kolkata")
EVALUATED_AT = datetime(2001, 1, 1, tzinfo=timezone.utc)


class TestReportService(unittest.TestCase):
    def setUp(self):
        self.service = ReportService(FakeOracle())

    def test_generate(self):
        report = self.service.generate(BIRTH, evaluation_time=EVALUATED_AT)

        self.assertEqual(report.ayanamsa, "Lahiri")
        self.assertEqual(report.ayanamsa_value, 23.85)
        self.assertEqual(set(report.divisional), {"D2", "D9", "D10"})
        self.assertEqual(report.dasha.maha.lord, CelestialBody.MOON)
        self.assertEqual(report.dasha_timeline.balance.lord, CelestialBody.MOON)
        self.assertEqual([y.name for y in report.yogas], ["Kemadruma"])
        self.assertEqual(report.dignities[CelestialBody.SUN], DignityState.EXALTED)
        self.assertEqual(len(report.doshas), 2)
        self.assertEqual(len(report.gochar.planets), 9)
        self.assertIsNone(report.compatibility)

    def test_generate_with_partner(self):
        report = self.service.generate(BIRTH, partner=PARTNER, evaluation_time=EVALUATED_AT)

        # Both charts come from the same static oracle
        self.assertEqual(report.compatibility.total_score, 28)
        self.assertEqual(len(report.compatibility.factors), 8)

    def test_json_dump(self):
        report = self.service.generate(BIRTH, partner=PARTNER, evaluation_time=EVALUATED_AT)
        data = report.model_dump(mode="json")

        self.assertEqual(data["birth"]["timezone"], "UTC")
        self.assertEqual(data["chart"]["planets"]["Moon"]["nakshatra"], "Rohini")
        self.assertEqual(data["dignities"]["Sun"], "Exalted")
        self.assertEqual(data["dasha"]["maha"]["level"], "maha")
        self.assertIn("D9", data["divisional"])

    def test_conjunction_orb_from_service_settings(self):
        oracle = FakeOracle({CelestialBody.JUPITER: 170.0, CelestialBody.SATURN: 175.0})

        wide = ReportService(oracle).generate(BIRTH, evaluation_time=EVALUATED_AT)
        narrow = ReportService(oracle, Settings(CONJUNCTION_ORB=2.0)).generate(
            BIRTH, evaluation_time=EVALUATED_AT
        )

        self.assertIn("Raja", [y.name for y in wide.yogas])
        self.assertNotIn("Raja", [y.name for y in narrow.yogas])

    def test_unknown_ayanamsa_is_rejected(self):
        birth = BirthInput(date(2000, 1, 1), time(0, 0), 28.6, 77.2, "UTC", ayanamsa="NoSuchAyanamsa")

        with self.assertRaises(UnsupportedAyanamsaError):
            self.service.generate(birth, evaluation_time=EVALUATED_AT)

    def test_ayanamsa_named_by_oracle(self):
        service = ReportService(FakeOracle(ayanamsa_name="Raman"))
        report = service.generate(BIRTH, evaluation_time=EVALUATED_AT)

        self.assertEqual(report.ayanamsa, "Raman")

    def test_strengths_in_report(self):
        report = self.service.generate(BIRTH, evaluation_time=EVALUATED_AT)
        data = report.model_dump(mode="json")

        self.assertEqual(len(report.strengths), 9)
        self.assertIn("shadbala", data["strengths"]["Sun"])

    def test_default_evaluation_time(self):
        report = self.service.generate(BIRTH)

        self.assertIsNotNone(report.evaluated_at.tzinfo)


if __name__ == "__main__":
    unittest.main()
