from typing import Dict, List, Optional

from jyotish.domain.kundali.constants import CelestialBody, HOUSE_COUNT, KENDRA_HOUSES
from jyotish.domain.kundali.derived.aspect_calculator import AspectCalculator
from jyotish.domain.kundali.derived.schemas import Aspect, PlanetStrength
from jyotish.domain.kundali.schemas import KundaliChart, Placement

PANAPHARA_HOUSES = frozenset({2, 5, 8, 11})

# House in which each planet gains directional strength
DIG_BALA_HOUSE: Dict[CelestialBody, int] = {
    CelestialBody.SUN: 10,
    CelestialBody.MARS: 10,
    CelestialBody.JUPITER: 1,
    CelestialBody.MERCURY: 1,
    CelestialBody.MOON: 4,
    CelestialBody.VENUS: 4,
    CelestialBody.SATURN: 7,
}

NAISARGIKA_BALA: Dict[CelestialBody, float] = {
    CelestialBody.SATURN: 60.0,
    CelestialBody.JUPITER: 50.0,
    CelestialBody.MARS: 40.0,
    CelestialBody.SUN: 30.0,
    CelestialBody.VENUS: 20.0,
    CelestialBody.MERCURY: 10.0,
    CelestialBody.MOON: 0.0,
}

FULL_BALA = 60.0
HALF_BALA = 30.0
QUARTER_BALA = 15.0
DRIK_PER_ASPECT = 10.0


class StrengthCalculator:
    """
    Calculates planetary strength.

    This class:
    - Scores the six shadbala components per body
    - Counts ashtakavarga points contributed by the other bodies
    - Reuses aspects already found for the chart when given
    """

    def __init__(self, aspect_calculator: Optional[AspectCalculator] = None):
        self.aspect_calculator = aspect_calculator or AspectCalculator()

    def calculate(
        self,
        kundali: KundaliChart,
        aspects: Optional[List[Aspect]] = None,
    ) -> Dict[CelestialBody, PlanetStrength]:
        if aspects is None:
            aspects = self.aspect_calculator.calculate(kundali)

        strengths: Dict[CelestialBody, PlanetStrength] = {}
        for body, placement in kundali.planets.items():
            involved = sum(1 for a in aspects if body in (a.first, a.second))
            strengths[body] = PlanetStrength(
                body=body,
                sthana=self.sthana_bala(placement),
                dig=self.dig_bala(placement),
                kala=FULL_BALA if placement.retrograde else HALF_BALA,
                chesta=FULL_BALA if abs(placement.speed) > 1.0 else HALF_BALA,
                naisargika=NAISARGIKA_BALA.get(body, 0.0),
                drik=involved * DRIK_PER_ASPECT,
                ashtakavarga=self.ashtakavarga(kundali, body),
            )

        return strengths

    # ─────────────────────────────────────────────
    # Components
    # ─────────────────────────────────────────────

    @staticmethod
    def sthana_bala(placement: Placement) -> float:
        if placement.house in KENDRA_HOUSES:
            return FULL_BALA
        if placement.house in PANAPHARA_HOUSES:
            return HALF_BALA
        return QUARTER_BALA

    @staticmethod
    def dig_bala(placement: Placement) -> float:
        if DIG_BALA_HOUSE.get(placement.body) == placement.house:
            return FULL_BALA
        return HALF_BALA

    @staticmethod
    def ashtakavarga(kundali: KundaliChart, body: CelestialBody) -> int:
        """
        One point per house for every other body in the chart.
        """
        others = sum(1 for other in kundali.planets if other is not body)
        return others * HOUSE_COUNT
