from typing import Tuple

from jyotish.domain.kundali.constants import ZodiacSign
from jyotish.domain.kundali.divisional.base import BaseDivisionalCalculator

HORA_SPAN = 30 / 2  # 15 degrees


class D2Calculator(BaseDivisionalCalculator):
    """
    Calculates the Hora (D2) chart using the Parashari scheme.

    Odd signs: first half is the Sun's hora (Leo), second the Moon's (Cancer).
    Even signs: the reverse.
    """

    chart_type = "D2"

    def division(
        self,
        sign: ZodiacSign,
        degree_in_sign: float
    ) -> Tuple[ZodiacSign, float]:
        half, degree = self._part(degree_in_sign, HORA_SPAN)

        first_half = half == 0
        if self._is_odd_sign(sign) == first_half:
            return ZodiacSign.LEO, degree
        return ZodiacSign.CANCER, degree
