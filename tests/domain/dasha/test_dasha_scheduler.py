import unittest
from datetime import datetime, timedelta, timezone

from jyotish.config import Settings
from jyotish.domain.dasha.scheduler import DASHA_LORDS, DashaScheduler
from jyotish.domain.dasha.schemas import DashaLevel
from jyotish.domain.kundali.constants import CelestialBody, Nakshatra

BIRTH = datetime(1990, 6, 15, 4, 30, tzinfo=timezone.utc)
YEAR = timedelta(days=365.25)


class TestDashaBalance(unittest.TestCase):
    def setUp(self):
        self.scheduler = DashaScheduler()

    def test_rohini_example(self):
        balance = self.scheduler.balance(45.0)

        self.assertEqual(balance.nakshatra, Nakshatra.ROHINI)
        self.assertEqual(balance.lord, CelestialBody.MOON)
        self.assertAlmostEqual(balance.fraction_elapsed, 0.375)
        self.assertAlmostEqual(balance.balance_years, 6.25)

    def test_start_of_nakshatra_has_full_balance(self):
        balance = self.scheduler.balance(0.0)

        self.assertEqual(balance.lord, CelestialBody.KETU)
        self.assertAlmostEqual(balance.balance_years, 7.0)


class TestMahaSequence(unittest.TestCase):
    def setUp(self):
        self.scheduler = DashaScheduler()

    def test_first_period_is_balance(self):
        periods = self.scheduler.maha_sequence(BIRTH, 45.0)

        first = periods[0]
        self.assertEqual(first.lord, CelestialBody.MOON)
        self.assertEqual(first.start, BIRTH)
        self.assertEqual(first.duration, YEAR * 6.25)

    def test_lords_follow_cycle(self):
        periods = self.scheduler.maha_sequence(BIRTH, 45.0)

        start = DASHA_LORDS.index(CelestialBody.MOON)
        expected = [DASHA_LORDS[(start + i) % 9] for i in range(len(periods))]
        self.assertEqual([p.lord for p in periods], expected)
        # 6.25 + 110 years falls short of 120, so the Moon returns
        self.assertEqual(len(periods), 10)

    def test_covers_at_least_120_years(self):
        for moon in (0.0, 45.0, 133.7, 359.9):
            periods = self.scheduler.maha_sequence(BIRTH, moon)
            span = periods[-1].end - periods[0].start
            self.assertGreaterEqual(span, YEAR * 120 - timedelta(seconds=1))

    def test_exact_cycle_from_nakshatra_start(self):
        periods = self.scheduler.maha_sequence(BIRTH, 0.0)
        self.assertEqual(len(periods), 9)

    def test_periods_are_contiguous(self):
        periods = self.scheduler.maha_sequence(BIRTH, 45.0)

        for previous, current in zip(periods, periods[1:]):
            self.assertEqual(previous.end, current.start)
        for period in periods:
            self.assertEqual(period.level, DashaLevel.MAHA)
            self.assertGreater(period.duration, timedelta(0))

    def test_configurable_year_length(self):
        scheduler = DashaScheduler(Settings(DASHA_YEAR_DAYS=360.0))
        first = scheduler.maha_sequence(BIRTH, 45.0)[0]
        self.assertEqual(first.duration, timedelta(days=360.0 * 6.25))


class TestSubdivision(unittest.TestCase):
    def setUp(self):
        self.scheduler = DashaScheduler()
        self.maha = self.scheduler.maha_sequence(BIRTH, 45.0)[1]

    def test_antar_durations_sum_to_parent(self):
        antars = self.scheduler.subdivide(self.maha)

        self.assertEqual(len(antars), 9)
        self.assertEqual(antars[0].start, self.maha.start)
        self.assertEqual(antars[-1].end, self.maha.end)
        total = sum((a.duration for a in antars), timedelta(0))
        self.assertEqual(total, self.maha.duration)

    def test_antar_order_and_contiguity(self):
        antars = self.scheduler.subdivide(self.maha)

        self.assertEqual(tuple(a.lord for a in antars), DASHA_LORDS)
        for previous, current in zip(antars, antars[1:]):
            self.assertEqual(previous.end, current.start)
        for antar in antars:
            self.assertEqual(antar.level, DashaLevel.ANTAR)
            self.assertGreater(antar.duration, timedelta(0))

    def test_antar_proportions(self):
        antars = self.scheduler.subdivide(self.maha)
        venus = antars[DASHA_LORDS.index(CelestialBody.VENUS)]

        expected = self.maha.duration * (20 / 120)
        self.assertLess(abs(venus.duration - expected), timedelta(seconds=1))

    def test_pratyantar_level(self):
        antar = self.scheduler.subdivide(self.maha)[3]
        pratyantars = self.scheduler.subdivide(antar)

        self.assertEqual({p.level for p in pratyantars}, {DashaLevel.PRATYANTAR})
        self.assertEqual(pratyantars[-1].end, antar.end)

    def test_pratyantar_is_not_subdivided(self):
        antar = self.scheduler.subdivide(self.maha)[0]
        pratyantar = self.scheduler.subdivide(antar)[0]

        with self.assertRaises(ValueError):
            self.scheduler.subdivide(pratyantar)


class TestSelection(unittest.TestCase):
    def setUp(self):
        self.scheduler = DashaScheduler()

    def test_select_containing_period(self):
        periods = self.scheduler.maha_sequence(BIRTH, 45.0)
        at = periods[2].start + timedelta(days=10)

        self.assertEqual(DashaScheduler.select(periods, at), periods[2])

    def test_select_falls_back_to_first(self):
        periods = self.scheduler.maha_sequence(BIRTH, 45.0)
        before_birth = BIRTH - timedelta(days=1)

        self.assertEqual(DashaScheduler.select(periods, before_birth), periods[0])

    def test_end_is_exclusive(self):
        periods = self.scheduler.maha_sequence(BIRTH, 45.0)

        self.assertEqual(DashaScheduler.select(periods, periods[0].end), periods[1])

    def test_calculate_right_after_birth(self):
        selection = self.scheduler.calculate(BIRTH, 45.0, BIRTH + timedelta(days=1))

        self.assertEqual(selection.maha.lord, CelestialBody.MOON)
        self.assertEqual(selection.antar.lord, CelestialBody.KETU)
        self.assertEqual(selection.pratyantar.lord, CelestialBody.KETU)

    def test_calculate_nests_periods(self):
        at = BIRTH + YEAR * 30
        selection = self.scheduler.calculate(BIRTH, 45.0, at)

        for period in (selection.maha, selection.antar, selection.pratyantar):
            self.assertTrue(period.contains(at))
        self.assertLessEqual(selection.maha.start, selection.antar.start)
        self.assertLessEqual(selection.antar.start, selection.pratyantar.start)

    def test_naive_instant_is_utc(self):
        at = datetime(2000, 1, 1)
        aware = self.scheduler.calculate(BIRTH, 45.0, at.replace(tzinfo=timezone.utc))
        naive = self.scheduler.calculate(BIRTH, 45.0, at)

        self.assertEqual(aware, naive)

    def test_timeline(self):
        timeline = self.scheduler.timeline(BIRTH, 45.0)

        self.assertEqual(timeline.balance.lord, CelestialBody.MOON)
        self.assertEqual(len(timeline.mahadashas), 10)
        for maha in timeline.mahadashas:
            self.assertEqual(len(maha.antardashas), 9)
            self.assertEqual(maha.antardashas[-1].end, maha.period.end)


if __name__ == "__main__":
    unittest.main()
