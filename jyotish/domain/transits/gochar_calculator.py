from typing import Dict, Tuple

from jyotish.domain.kundali.constants import CelestialBody, ZodiacSign
from jyotish.domain.kundali.schemas import KundaliChart
from jyotish.domain.transits.schemas import Gochar, GocharPlanet, SadeSati, TransitChart


# Saturn's sign offset from the natal Moon (0 = same sign)
SADE_SATI_PHASES: Dict[int, Tuple[str, str]] = {
    11: (
        "Sade Sati (Rising)",
        "Saturn is in the 12th house from your Moon. This is the first phase of Sade Sati.",
    ),
    0: (
        "Sade Sati (Peak)",
        "Saturn is transiting over your natal Moon. This is the peak phase of Sade Sati.",
    ),
    1: (
        "Sade Sati (Setting)",
        "Saturn is in the 2nd house from your Moon. This is the final phase of Sade Sati.",
    ),
    3: (
        "Dhaiya (Small Panoti)",
        "Saturn is in the 4th house from your Moon (Ardha-Ashtama Shani).",
    ),
    7: (
        "Dhaiya (Small Panoti)",
        "Saturn is in the 8th house from your Moon (Ashtama Shani).",
    ),
}


class GocharCalculator:
    """
    Calculates gochar (relative transit positions)
    from Lagna and Moon.
    """

    def calculate(
        self,
        kundali: KundaliChart,
        transit: TransitChart
    ) -> Gochar:
        """
        Calculate gochar for all transit planets.
        """
        lagna_sign = kundali.ascendant.sign
        moon_sign = kundali.placement(CelestialBody.MOON).sign

        gochar_planets: Dict[CelestialBody, GocharPlanet] = {}

        for body, transit_planet in transit.planets.items():
            gochar_planets[body] = GocharPlanet(
                body=body,
                from_lagna_house=self.house_from_reference(lagna_sign, transit_planet.sign),
                from_moon_house=self.house_from_reference(moon_sign, transit_planet.sign),
            )

        return Gochar(
            planets=gochar_planets,
            sade_sati=self.sade_sati(kundali, transit),
        )

    def sade_sati(
        self,
        kundali: KundaliChart,
        transit: TransitChart
    ) -> SadeSati:
        """
        Current Sade Sati status based on Saturn's transit.
        """
        moon_sign = kundali.placement(CelestialBody.MOON).sign
        saturn_sign = transit.planets[CelestialBody.SATURN].sign

        diff = (saturn_sign.index - moon_sign.index) % 12
        status, description = SADE_SATI_PHASES.get(
            diff,
            ("None", "Saturn is not in a critical position relative to your Moon."),
        )

        return SadeSati(
            status=status,
            description=description,
            saturn_sign=saturn_sign,
            moon_sign=moon_sign,
        )

    @staticmethod
    def house_from_reference(
        reference_sign: ZodiacSign,
        transit_sign: ZodiacSign
    ) -> int:
        """
        House number of transit_sign from reference_sign (Lagna or Moon).
        """
        # Inclusive forward count (1–12)
        return ((transit_sign.index - reference_sign.index) % 12) + 1
