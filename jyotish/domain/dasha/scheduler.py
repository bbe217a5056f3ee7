import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from jyotish.config import Settings, settings as default_settings
from jyotish.domain.kundali import angles
from jyotish.domain.kundali.constants import CelestialBody
from jyotish.domain.dasha.schemas import (
    DashaBalance,
    DashaLevel,
    DashaSelection,
    DashaTimeline,
    MahaDasha,
    RulershipPeriod,
)

logger = logging.getLogger(__name__)


# Order of Dasha Lords and their duration in years
DASHA_SEQUENCE: Tuple[Tuple[CelestialBody, int], ...] = (
    (CelestialBody.KETU, 7),
    (CelestialBody.VENUS, 20),
    (CelestialBody.SUN, 6),
    (CelestialBody.MOON, 10),
    (CelestialBody.MARS, 7),
    (CelestialBody.RAHU, 18),
    (CelestialBody.JUPITER, 16),
    (CelestialBody.SATURN, 19),
    (CelestialBody.MERCURY, 17),
)

TOTAL_YEARS = 120

DASHA_LORDS: Tuple[CelestialBody, ...] = tuple(lord for lord, _ in DASHA_SEQUENCE)

_CHILD_LEVEL = {
    DashaLevel.MAHA: DashaLevel.ANTAR,
    DashaLevel.ANTAR: DashaLevel.PRATYANTAR,
}


class DashaScheduler:
    """
    Vimshottari dasha scheduler.

    This class:
    - Places the native in the first mahadasha from the Moon's nakshatra
    - Builds the mahadasha sequence covering at least 120 years
    - Subdivides a period into antar / pratyantar periods
    - Selects the periods active at a given instant

    Subdivisions always follow the fixed order starting at Ketu.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.year_days = (settings or default_settings).DASHA_YEAR_DAYS

    # ─────────────────────────────────────────────
    # Starting point
    # ─────────────────────────────────────────────

    def balance(self, moon_longitude: float) -> DashaBalance:
        nakshatra, _ = angles.constellation_of(moon_longitude)
        lord = angles.constellation_lord(nakshatra)
        fraction = angles.fraction_traversed(moon_longitude)
        years = DASHA_SEQUENCE[DASHA_LORDS.index(lord)][1]

        return DashaBalance(
            nakshatra=nakshatra,
            lord=lord,
            fraction_elapsed=fraction,
            balance_years=years * (1.0 - fraction),
        )

    # ─────────────────────────────────────────────
    # Sequences
    # ─────────────────────────────────────────────

    def maha_sequence(
        self,
        birth: datetime,
        moon_longitude: float
    ) -> List[RulershipPeriod]:
        """
        Balance period, then full periods in cyclic order until
        the cumulative span reaches 120 years.
        """
        birth = self._as_utc(birth)
        start_balance = self.balance(moon_longitude)
        idx = DASHA_LORDS.index(start_balance.lord)

        periods: List[RulershipPeriod] = []
        current = birth
        cumulative = 0.0

        end = current + self._years(start_balance.balance_years)
        if end > current:
            periods.append(
                RulershipPeriod(lord=start_balance.lord, level=DashaLevel.MAHA, start=current, end=end)
            )
            current = end
        else:
            logger.debug(f"Zero-length {start_balance.lord.value} balance skipped")
        cumulative += start_balance.balance_years

        while cumulative < TOTAL_YEARS:
            idx = (idx + 1) % len(DASHA_SEQUENCE)
            lord, years = DASHA_SEQUENCE[idx]
            end = current + self._years(years)
            periods.append(
                RulershipPeriod(lord=lord, level=DashaLevel.MAHA, start=current, end=end)
            )
            current = end
            cumulative += years

        return periods

    def subdivide(self, parent: RulershipPeriod) -> List[RulershipPeriod]:
        """
        Split a period into 9 children proportional to their years.

        Boundaries come from cumulative weights, so the last child
        ends exactly at the parent's end.
        """
        level = _CHILD_LEVEL.get(parent.level)
        if level is None:
            raise ValueError(f"{parent.level.value} periods are not subdivided")

        span = parent.duration
        children: List[RulershipPeriod] = []
        current = parent.start
        cumulative = 0

        for i, (lord, years) in enumerate(DASHA_SEQUENCE):
            cumulative += years
            if i == len(DASHA_SEQUENCE) - 1:
                end = parent.end
            else:
                end = parent.start + span * (cumulative / TOTAL_YEARS)

            children.append(
                RulershipPeriod(lord=lord, level=level, start=current, end=end)
            )
            current = end

        return children

    @staticmethod
    def select(
        periods: Sequence[RulershipPeriod],
        at: datetime
    ) -> RulershipPeriod:
        """
        First period containing `at`; the first period otherwise.
        """
        if not periods:
            raise ValueError("No periods to select from")
        for period in periods:
            if period.contains(at):
                return period
        return periods[0]

    # ─────────────────────────────────────────────
    # Public entry points
    # ─────────────────────────────────────────────

    def calculate(
        self,
        birth: datetime,
        moon_longitude: float,
        at: datetime
    ) -> DashaSelection:
        """
        Maha, antar and pratyantar periods active at `at`.
        """
        at = self._as_utc(at)

        maha = self.select(self.maha_sequence(birth, moon_longitude), at)
        antar = self.select(self.subdivide(maha), at)
        pratyantar = self.select(self.subdivide(antar), at)

        logger.debug(
            f"Dasha at {at.isoformat()}: "
            f"{maha.lord.value} / {antar.lord.value} / {pratyantar.lord.value}"
        )
        return DashaSelection(maha=maha, antar=antar, pratyantar=pratyantar)

    def timeline(
        self,
        birth: datetime,
        moon_longitude: float
    ) -> DashaTimeline:
        """
        Every mahadasha from birth with its antardashas.
        """
        return DashaTimeline(
            balance=self.balance(moon_longitude),
            mahadashas=[
                MahaDasha(period=maha, antardashas=self.subdivide(maha))
                for maha in self.maha_sequence(birth, moon_longitude)
            ],
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _years(self, years: float) -> timedelta:
        return timedelta(days=years * self.year_days)

    @staticmethod
    def _as_utc(instant: datetime) -> datetime:
        # Naive instants are taken as UTC
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc)
