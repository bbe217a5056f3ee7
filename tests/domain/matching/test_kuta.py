import unittest

from chart_fixtures import make_chart, make_placement, without

from jyotish.domain.kundali.constants import CelestialBody, NAKSHATRA_SPAN
from jyotish.domain.kundali.errors import MissingPlacement
from jyotish.domain.matching.kuta import CompatibilityScorer

MOON = CelestialBody.MOON


def moon_at(longitude):
    return make_placement(MOON, longitude)


class TestCompatibilityScorer(unittest.TestCase):
    def setUp(self):
        self.scorer = CompatibilityScorer()

    def factor(self, result, name):
        return next(f for f in result.factors if f.name == name)

    def test_identical_moons(self):
        result = self.scorer.score_moons(moon_at(45.0), moon_at(45.0))

        scores = {f.name: f.score for f in result.factors}
        self.assertEqual(scores, {
            "Varna": 1,
            "Vashya": 2,
            "Tara": 3,
            "Yoni": 4,
            "Graha Maitri": 5,
            "Gana": 6,
            "Bhakoot": 7,
            "Nadi": 0,
        })
        self.assertEqual(result.total_score, 28)
        self.assertEqual(result.max_score, 36)
        self.assertEqual(result.percentage, 77.8)
        self.assertEqual(result.verdict, "Excellent Match")

    def test_factor_maxima(self):
        result = self.scorer.score_moons(moon_at(45.0), moon_at(200.0))

        maxima = [f.max for f in result.factors]
        self.assertEqual(maxima, [1, 2, 3, 4, 5, 6, 7, 8])
        self.assertEqual(sum(maxima), 36)

    def test_bounds_for_every_nakshatra_pair(self):
        longitudes = [i * NAKSHATRA_SPAN + NAKSHATRA_SPAN / 2 for i in range(27)]

        for boy in longitudes:
            for girl in longitudes:
                result = self.scorer.score_moons(moon_at(boy), moon_at(girl))
                self.assertGreaterEqual(result.total_score, 0)
                self.assertLessEqual(result.total_score, 36)
                self.assertGreaterEqual(result.percentage, 0)
                self.assertLessEqual(result.percentage, 100)
                for f in result.factors:
                    self.assertGreaterEqual(f.score, 0)
                    self.assertLessEqual(f.score, f.max)

    def test_bhakoot_six_eight(self):
        # Aries and Virgo are 8/6 apart
        result = self.scorer.score_moons(moon_at(5.0), moon_at(155.0))

        self.assertEqual(self.factor(result, "Bhakoot").score, 0)

    def test_graha_maitri_mutual_friends(self):
        # Leo (Sun) and Cancer (Moon)
        result = self.scorer.score_moons(moon_at(125.0), moon_at(95.0))

        self.assertEqual(self.factor(result, "Graha Maitri").score, 5)

    def test_graha_maitri_neutral_and_enemy(self):
        # Mars treats Mercury as an enemy, Mercury treats Mars as neutral
        result = self.scorer.score_moons(moon_at(5.0), moon_at(65.0))

        maitri = self.factor(result, "Graha Maitri")
        self.assertEqual(maitri.score, 0.5)
        self.assertEqual((maitri.boy_value, maitri.girl_value), ("Mars", "Mercury"))

    def test_tara_counts_both_directions(self):
        # Ashwini → Krittika is tara 3, Krittika → Ashwini is tara 8
        result = self.scorer.score_moons(moon_at(5.0), moon_at(30.0))

        self.assertEqual(self.factor(result, "Tara").score, 1.5)

    def test_yoni_enemies(self):
        # Ashwini (Horse) and Hasta (Buffalo)
        result = self.scorer.score_moons(moon_at(5.0), moon_at(165.0))

        self.assertEqual(self.factor(result, "Yoni").score, 0)

    def test_nadi_differs(self):
        # Ashwini (Adi) and Bharani (Madhya)
        result = self.scorer.score_moons(moon_at(5.0), moon_at(20.0))

        self.assertEqual(self.factor(result, "Nadi").score, 8)

    def test_varna_depends_on_direction(self):
        # Cancer is Brahmin, Gemini is Shudra
        brahmin_boy = self.scorer.score_moons(moon_at(95.0), moon_at(65.0))
        shudra_boy = self.scorer.score_moons(moon_at(65.0), moon_at(95.0))

        self.assertEqual(self.factor(brahmin_boy, "Varna").score, 1)
        self.assertEqual(self.factor(shudra_boy, "Varna").score, 0)

    def test_verdict_bands(self):
        self.assertEqual(CompatibilityScorer.verdict(25), "Excellent Match")
        self.assertEqual(CompatibilityScorer.verdict(24.5), "Good Match")
        self.assertEqual(CompatibilityScorer.verdict(18), "Good Match")
        self.assertEqual(CompatibilityScorer.verdict(12), "Average Match")
        self.assertEqual(CompatibilityScorer.verdict(11.5), "Below Average")

    def test_score_charts(self):
        boy = make_chart({MOON: 45.0})
        girl = make_chart({MOON: 200.0})

        result = self.scorer.score(boy, girl)
        expected = self.scorer.score_moons(boy.placement(MOON), girl.placement(MOON))
        self.assertEqual(result, expected)

    def test_missing_moon(self):
        with self.assertRaises(MissingPlacement):
            self.scorer.score(make_chart(), without(make_chart(), MOON))


if __name__ == "__main__":
    unittest.main()
