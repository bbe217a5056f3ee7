from typing import Dict, List

from jyotish.domain.kundali.constants import BENEFIC_BODIES, HOUSE_COUNT, MALEFIC_BODIES
from jyotish.domain.kundali.derived.schemas import HouseStrength
from jyotish.domain.kundali.schemas import KundaliChart


class HouseCalculator:
    """
    Calculates strength of houses based on
    benefic and malefic occupants.
    """

    def calculate(
        self,
        kundali: KundaliChart
    ) -> Dict[int, HouseStrength]:
        """
        Calculate strength for each house (1–12).
        """
        house_strengths: Dict[int, HouseStrength] = {}

        for house in range(1, HOUSE_COUNT + 1):
            reasons: List[str] = []
            score = 0

            for body in kundali.bodies_in_house(house):
                if body in BENEFIC_BODIES:
                    score += 1
                    reasons.append(f"{body.value} (benefic) occupies house {house}")
                elif body in MALEFIC_BODIES:
                    score -= 1
                    reasons.append(f"{body.value} (malefic) occupies house {house}")

            if score >= 2:
                strength = "strong"
            elif score <= -1:
                strength = "weak"
            else:
                strength = "average"

            house_strengths[house] = HouseStrength(
                house=house,
                strength=strength,
                score=score,
                reasons=reasons,
            )

        return house_strengths
