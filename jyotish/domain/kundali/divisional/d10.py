from typing import Tuple

from jyotish.domain.kundali.constants import ZodiacSign
from jyotish.domain.kundali.divisional.base import BaseDivisionalCalculator

DASHAMSHA_SPAN = 30 / 10  # 3 degrees


class D10Calculator(BaseDivisionalCalculator):
    """
    Calculates the Dashamsha (D10) chart from a D1 kundali.
    Used primarily for career and professional analysis.

    Odd signs count from the sign itself, even signs from the 9th.
    """

    chart_type = "D10"

    def division(
        self,
        sign: ZodiacSign,
        degree_in_sign: float
    ) -> Tuple[ZodiacSign, float]:
        dashamsha_index, degree = self._part(degree_in_sign, DASHAMSHA_SPAN)

        if self._is_odd_sign(sign):
            return sign.shifted(dashamsha_index), degree
        return sign.shifted(8 + dashamsha_index), degree
