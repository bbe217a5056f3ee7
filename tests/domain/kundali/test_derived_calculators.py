import unittest

from chart_fixtures import make_chart

from jyotish.config import Settings
from jyotish.domain.kundali.constants import CelestialBody
from jyotish.domain.kundali.derived.aspect_calculator import AspectCalculator
from jyotish.domain.kundali.derived.derived_builder import DerivedBuilder
from jyotish.domain.kundali.derived.dosha_calculator import DoshaCalculator
from jyotish.domain.kundali.derived.house_calculator import HouseCalculator
from jyotish.domain.kundali.derived.strength_calculator import StrengthCalculator
from jyotish.domain.kundali.derived.yogas import PatternDetector

SUN = CelestialBody.SUN
MERCURY = CelestialBody.MERCURY


class TestAspectCalculator(unittest.TestCase):
    def test_windows(self):
        self.assertEqual(AspectCalculator.window_for(5.0).kind, "Conjunction")
        self.assertEqual(AspectCalculator.window_for(62.0).kind, "Sextile")
        self.assertEqual(AspectCalculator.window_for(94.0).kind, "Square")
        self.assertEqual(AspectCalculator.window_for(121.0).kind, "Trine")
        self.assertEqual(AspectCalculator.window_for(172.0).kind, "Opposition")
        self.assertIsNone(AspectCalculator.window_for(100.0))

    def test_square_between_sun_and_mercury(self):
        aspects = AspectCalculator().calculate(make_chart())

        pair = next(a for a in aspects if {a.first, a.second} == {SUN, MERCURY})
        self.assertEqual(pair.kind, "Square")
        self.assertEqual(pair.orb, 0.0)

    def test_nodes_always_opposed(self):
        aspects = AspectCalculator().calculate(make_chart())

        nodes = next(
            a for a in aspects
            if {a.first, a.second} == {CelestialBody.RAHU, CelestialBody.KETU}
        )
        self.assertEqual(nodes.kind, "Opposition")


class TestDoshaCalculator(unittest.TestCase):
    def setUp(self):
        self.calculator = DoshaCalculator()

    def test_mangal_dosha(self):
        self.assertFalse(self.calculator.mangal_dosha(make_chart()).present)  # Mars in 5th

        dosha = self.calculator.mangal_dosha(make_chart({CelestialBody.MARS: 15.0}))
        self.assertTrue(dosha.present)
        self.assertIn("house 1", dosha.description)

    def test_kaal_sarp_absent(self):
        self.assertFalse(self.calculator.kaal_sarp_dosha(make_chart()).present)

    def test_kaal_sarp_present(self):
        chart = make_chart({
            CelestialBody.SUN: 160.0,
            CelestialBody.MOON: 200.0,
            CelestialBody.MARS: 210.0,
            CelestialBody.MERCURY: 170.0,
            CelestialBody.JUPITER: 250.0,
            CelestialBody.VENUS: 300.0,
            CelestialBody.SATURN: 320.0,
        })
        dosha = self.calculator.kaal_sarp_dosha(chart)

        self.assertTrue(dosha.present)
        self.assertEqual(dosha.type, "Anant (Rahu to Ketu)")

    def test_kaal_sarp_reverse_arc(self):
        chart = make_chart({
            CelestialBody.SUN: 340.0,
            CelestialBody.MOON: 10.0,
            CelestialBody.MARS: 20.0,
            CelestialBody.MERCURY: 350.0,
            CelestialBody.JUPITER: 60.0,
            CelestialBody.VENUS: 100.0,
            CelestialBody.SATURN: 140.0,
        })
        dosha = self.calculator.kaal_sarp_dosha(chart)

        self.assertTrue(dosha.present)
        self.assertEqual(dosha.type, "Kulat (Ketu to Rahu)")

    def test_calculate_reports_both(self):
        names = [d.name for d in self.calculator.calculate(make_chart())]
        self.assertEqual(names, ["Mangal Dosha", "Kaal Sarp Dosha"])


class TestHouseCalculator(unittest.TestCase):
    def test_strengths(self):
        strengths = HouseCalculator().calculate(make_chart())

        self.assertEqual(len(strengths), 12)
        self.assertEqual(strengths[1].strength, "average")  # Sun
        self.assertEqual(strengths[12].strength, "weak")  # Ketu
        self.assertEqual(strengths[6].score, 0)  # Jupiter and Rahu

    def test_strong_house(self):
        chart = make_chart({CelestialBody.VENUS: 10.0})
        self.assertEqual(HouseCalculator().calculate(chart)[1].strength, "strong")


class TestStrengthCalculator(unittest.TestCase):
    def setUp(self):
        self.calculator = StrengthCalculator()

    def test_mars_in_tenth_moving_fast(self):
        chart = make_chart({CelestialBody.MARS: 275.0}, speeds={CelestialBody.MARS: 1.2})
        mars = self.calculator.calculate(chart)[CelestialBody.MARS]

        self.assertEqual(mars.sthana, 60.0)
        self.assertEqual(mars.dig, 60.0)
        self.assertEqual(mars.kala, 30.0)
        self.assertEqual(mars.chesta, 60.0)
        self.assertEqual(mars.naisargika, 40.0)

    def test_retrograde_saturn(self):
        chart = make_chart(speeds={CelestialBody.SATURN: -0.05})
        saturn = self.calculator.calculate(chart)[CelestialBody.SATURN]

        self.assertEqual(saturn.sthana, 15.0)  # 9th
        self.assertEqual(saturn.dig, 30.0)
        self.assertEqual(saturn.kala, 60.0)
        self.assertEqual(saturn.chesta, 30.0)
        self.assertEqual(saturn.naisargika, 60.0)

    def test_nodes_have_no_natural_strength(self):
        strengths = self.calculator.calculate(make_chart())

        self.assertEqual(strengths[CelestialBody.RAHU].naisargika, 0.0)
        self.assertEqual(strengths[CelestialBody.KETU].naisargika, 0.0)

    def test_drik_counts_aspects(self):
        chart = make_chart()
        aspects = AspectCalculator().calculate(chart)
        strengths = self.calculator.calculate(chart, aspects)

        for body, strength in strengths.items():
            involved = [a for a in aspects if body in (a.first, a.second)]
            self.assertEqual(strength.drik, 10.0 * len(involved))
        self.assertGreaterEqual(strengths[MERCURY].drik, 10.0)  # square to the Sun

    def test_shadbala_total_and_ashtakavarga(self):
        strengths = self.calculator.calculate(make_chart())
        sun = strengths[SUN]

        self.assertEqual(len(strengths), 9)
        self.assertEqual(
            sun.shadbala,
            sun.sthana + sun.dig + sun.kala + sun.chesta + sun.naisargika + sun.drik,
        )
        self.assertEqual(sun.ashtakavarga, 8 * 12)
        self.assertIn("shadbala", sun.model_dump())


class TestDerivedBuilder(unittest.TestCase):
    def test_build(self):
        derived = DerivedBuilder().build(make_chart())

        self.assertEqual(len(derived.dignities), 9)
        self.assertEqual([y.name for y in derived.yogas], ["Kemadruma"])
        self.assertEqual(len(derived.doshas), 2)
        self.assertTrue(derived.aspects)
        self.assertEqual(len(derived.house_strengths), 12)
        self.assertEqual(len(derived.strengths), 9)

    def test_settings_reach_pattern_detector(self):
        chart = make_chart({CelestialBody.JUPITER: 170.0, CelestialBody.SATURN: 175.0})

        wide = DerivedBuilder().build(chart)
        narrow = DerivedBuilder(Settings(CONJUNCTION_ORB=2.0)).build(chart)

        self.assertIn("Raja", [y.name for y in wide.yogas])
        self.assertNotIn("Raja", [y.name for y in narrow.yogas])

    def test_injected_detector_is_kept(self):
        detector = PatternDetector(rules=())
        derived = DerivedBuilder(Settings(), pattern_detector=detector).build(make_chart())

        self.assertEqual(derived.yogas, [])


if __name__ == "__main__":
    unittest.main()
