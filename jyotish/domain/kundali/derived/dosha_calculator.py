from typing import List

from jyotish.domain.kundali import angles
from jyotish.domain.kundali.constants import CelestialBody, NODES
from jyotish.domain.kundali.derived.schemas import Dosha
from jyotish.domain.kundali.schemas import KundaliChart


# Houses considered for Mangal Dosha
MANGAL_DOSHA_HOUSES = {1, 2, 4, 7, 8, 12}


class DoshaCalculator:
    """
    Detects major doshas in a kundali.

    Current support:
    - Mangal Dosha
    - Kaal Sarp Dosha
    """

    def calculate(
        self,
        kundali: KundaliChart
    ) -> List[Dosha]:
        """
        Calculate all applicable doshas.
        """
        return [
            self.mangal_dosha(kundali),
            self.kaal_sarp_dosha(kundali),
        ]

    # ─────────────────────────────────────────────
    # Mangal Dosha
    # ─────────────────────────────────────────────

    def mangal_dosha(
        self,
        kundali: KundaliChart
    ) -> Dosha:
        """
        Mangal Dosha occurs if Mars is placed in
        certain houses from the ascendant.
        """
        mars = kundali.placement(CelestialBody.MARS)

        if mars.house in MANGAL_DOSHA_HOUSES:
            return Dosha(
                name="Mangal Dosha",
                present=True,
                severity="medium",
                description=(
                    f"Mars is placed in house {mars.house}, "
                    "which is considered a Manglik position."
                ),
            )

        return Dosha(
            name="Mangal Dosha",
            present=False,
            description=f"Mars is in house {mars.house}, not a Manglik position."
        )

    # ─────────────────────────────────────────────
    # Kaal Sarp Dosha
    # ─────────────────────────────────────────────

    def kaal_sarp_dosha(
        self,
        kundali: KundaliChart
    ) -> Dosha:
        """
        Occurs if all seven planets lie on one side
        of the Rahu–Ketu axis.
        """
        rahu = kundali.placement(CelestialBody.RAHU).longitude
        ketu = kundali.placement(CelestialBody.KETU).longitude

        others = [
            p.longitude for p in kundali.planets.values()
            if p.body not in NODES
        ]

        if all(self._in_arc(lon, rahu, ketu) for lon in others):
            return Dosha(
                name="Kaal Sarp Dosha",
                present=True,
                type="Anant (Rahu to Ketu)",
                severity="high",
                description="All planets are hemmed between Rahu and Ketu.",
            )

        if all(self._in_arc(lon, ketu, rahu) for lon in others):
            return Dosha(
                name="Kaal Sarp Dosha",
                present=True,
                type="Kulat (Ketu to Rahu)",
                severity="high",
                description="All planets are hemmed between Ketu and Rahu.",
            )

        return Dosha(
            name="Kaal Sarp Dosha",
            present=False,
            description="Planets are not hemmed between the nodes."
        )

    @staticmethod
    def _in_arc(longitude: float, start: float, end: float) -> bool:
        """
        True if `longitude` lies on the forward arc from start to end.
        """
        return angles.normalize(longitude - start) <= angles.normalize(end - start)
