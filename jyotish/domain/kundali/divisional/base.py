from abc import ABC, abstractmethod
from typing import Dict, Tuple

from jyotish.domain.kundali.constants import CelestialBody, ZodiacSign
from jyotish.domain.kundali.divisional.schemas import DivisionalChart, DivisionalPosition
from jyotish.domain.kundali.schemas import KundaliChart


class BaseDivisionalCalculator(ABC):
    """
    Abstract base class for all divisional chart calculators.

    Each divisional chart must:
    - Set `chart_type`
    - Implement `division`, mapping a D1 sign and degree to the
      divisional sign and degree
    """

    chart_type: str

    @abstractmethod
    def division(
        self,
        sign: ZodiacSign,
        degree_in_sign: float
    ) -> Tuple[ZodiacSign, float]:
        raise NotImplementedError

    def calculate(
        self,
        kundali: KundaliChart
    ) -> DivisionalChart:
        """
        Calculate the divisional chart from a D1 kundali.
        """
        asc_sign, asc_degree = self.division(
            kundali.ascendant.sign,
            kundali.ascendant.degree
        )
        ascendant = DivisionalPosition(sign=asc_sign, degree=asc_degree, house=1)

        planets: Dict[CelestialBody, DivisionalPosition] = {}
        for body, placement in kundali.planets.items():
            sign, degree = self.division(placement.sign, placement.degree)
            planets[body] = DivisionalPosition(
                sign=sign,
                degree=degree,
                house=((sign.index - asc_sign.index) % 12) + 1,
                retrograde=placement.retrograde,
            )

        return DivisionalChart(
            chart_type=self.chart_type,
            ascendant=ascendant,
            planets=planets,
        )

    # ─────────────────────────────────────────────
    # Shared helpers
    # ─────────────────────────────────────────────

    @staticmethod
    def _part(degree_in_sign: float, span: float) -> Tuple[int, float]:
        """
        Index of the part containing the degree, and the degree
        scaled back to a 30° sign.
        """
        index = min(int(degree_in_sign // span), int(round(30.0 / span)) - 1)
        degree = (degree_in_sign - index * span) * (30.0 / span)
        return index, round(degree, 2)

    @staticmethod
    def _is_odd_sign(sign: ZodiacSign) -> bool:
        # Aries (index 0) is the first, odd sign
        return sign.index % 2 == 0
