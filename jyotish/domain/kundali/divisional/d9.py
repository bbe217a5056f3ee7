from typing import Tuple

from jyotish.domain.kundali.constants import ZodiacSign
from jyotish.domain.kundali.divisional.base import BaseDivisionalCalculator

NAVAMSHA_SPAN = 30 / 9  # 3.333333...


class D9Calculator(BaseDivisionalCalculator):
    """
    Calculates the Navamsha (D9) chart from a D1 kundali.
    """

    chart_type = "D9"

    def division(
        self,
        sign: ZodiacSign,
        degree_in_sign: float
    ) -> Tuple[ZodiacSign, float]:
        navamsha_index, degree = self._part(degree_in_sign, NAVAMSHA_SPAN)

        # Navamshas run continuously from Aries: sign N starts at 9N
        return sign.shifted(sign.index * 8 + navamsha_index), degree
