from typing import Dict, FrozenSet, NamedTuple

from jyotish.domain.kundali.constants import (
    BENEFIC_BODIES,
    CelestialBody,
    ZodiacSign,
)
from jyotish.domain.kundali.derived.schemas import DignityInfo, DignityState
from jyotish.domain.kundali.schemas import KundaliChart, Placement

# Within this many degrees of the exact point the dignity is "deep"
DEEP_ORB = 1.0


class DignityPoint(NamedTuple):
    sign: ZodiacSign
    degree: float


EXALTATION: Dict[CelestialBody, DignityPoint] = {
    CelestialBody.SUN: DignityPoint(ZodiacSign.ARIES, 10.0),
    CelestialBody.MOON: DignityPoint(ZodiacSign.TAURUS, 3.0),
    CelestialBody.MARS: DignityPoint(ZodiacSign.CAPRICORN, 28.0),
    CelestialBody.MERCURY: DignityPoint(ZodiacSign.VIRGO, 15.0),
    CelestialBody.JUPITER: DignityPoint(ZodiacSign.CANCER, 5.0),
    CelestialBody.VENUS: DignityPoint(ZodiacSign.PISCES, 27.0),
    CelestialBody.SATURN: DignityPoint(ZodiacSign.LIBRA, 20.0),
    CelestialBody.RAHU: DignityPoint(ZodiacSign.GEMINI, 20.0),
    CelestialBody.KETU: DignityPoint(ZodiacSign.SAGITTARIUS, 20.0),
}

# Debilitation is the exact opposite point
DEBILITATION: Dict[CelestialBody, DignityPoint] = {
    body: DignityPoint(point.sign.shifted(6), point.degree)
    for body, point in EXALTATION.items()
}

_MERCURY_SIGNS = frozenset({ZodiacSign.GEMINI, ZodiacSign.VIRGO})
_JUPITER_SIGNS = frozenset({ZodiacSign.SAGITTARIUS, ZodiacSign.PISCES})

OWN_SIGNS: Dict[CelestialBody, FrozenSet[ZodiacSign]] = {
    CelestialBody.SUN: frozenset({ZodiacSign.LEO}),
    CelestialBody.MOON: frozenset({ZodiacSign.CANCER}),
    CelestialBody.MARS: frozenset({ZodiacSign.ARIES, ZodiacSign.SCORPIO}),
    CelestialBody.MERCURY: _MERCURY_SIGNS,
    CelestialBody.JUPITER: _JUPITER_SIGNS,
    CelestialBody.VENUS: frozenset({ZodiacSign.TAURUS, ZodiacSign.LIBRA}),
    CelestialBody.SATURN: frozenset({ZodiacSign.CAPRICORN, ZodiacSign.AQUARIUS}),
    CelestialBody.RAHU: _MERCURY_SIGNS,
    CelestialBody.KETU: _JUPITER_SIGNS,
}

MOOLATRIKONA: Dict[CelestialBody, ZodiacSign] = {
    CelestialBody.SUN: ZodiacSign.LEO,
    CelestialBody.MOON: ZodiacSign.TAURUS,
    CelestialBody.MARS: ZodiacSign.ARIES,
    CelestialBody.MERCURY: ZodiacSign.VIRGO,
    CelestialBody.JUPITER: ZodiacSign.SAGITTARIUS,
    CelestialBody.VENUS: ZodiacSign.LIBRA,
    CelestialBody.SATURN: ZodiacSign.AQUARIUS,
}


class DignityClassifier:
    """
    Classifies the dignity of a placed body.

    Precedence (first match wins):
    - Deep exaltation, exaltation
    - Deep debilitation, debilitation
    - Own sign
    - Natural benefic / malefic

    A retrograde body is reported as Retrograde regardless.
    """

    def classify(self, placement: Placement) -> DignityState:
        return self.describe(placement).state

    def describe(self, placement: Placement) -> DignityInfo:
        body = placement.body
        sign = placement.sign
        degree = placement.degree

        exalted = self.is_exalted(body, sign)
        debilitated = self.is_debilitated(body, sign)
        own_sign = sign in OWN_SIGNS[body]
        retrograde = placement.speed < 0

        if retrograde:
            state = DignityState.RETROGRADE
        elif exalted:
            deep = abs(degree - EXALTATION[body].degree) < DEEP_ORB
            state = DignityState.DEEP_EXALTATION if deep else DignityState.EXALTED
        elif debilitated:
            deep = abs(degree - DEBILITATION[body].degree) < DEEP_ORB
            state = DignityState.DEEP_DEBILITATION if deep else DignityState.DEBILITATED
        elif own_sign:
            state = DignityState.OWN_SIGN
        elif body in BENEFIC_BODIES:
            state = DignityState.BENEFIC
        else:
            state = DignityState.MALEFIC

        return DignityInfo(
            body=body,
            state=state,
            exalted=exalted,
            debilitated=debilitated,
            own_sign=own_sign,
            moolatrikona=MOOLATRIKONA.get(body) == sign,
            retrograde=retrograde,
        )

    def classify_chart(self, kundali: KundaliChart) -> Dict[CelestialBody, DignityInfo]:
        return {
            body: self.describe(placement)
            for body, placement in kundali.planets.items()
        }

    # ─────────────────────────────────────────────
    # Sign tests
    # ─────────────────────────────────────────────

    @staticmethod
    def is_exalted(body: CelestialBody, sign: ZodiacSign) -> bool:
        return EXALTATION[body].sign == sign

    @staticmethod
    def is_debilitated(body: CelestialBody, sign: ZodiacSign) -> bool:
        return DEBILITATION[body].sign == sign

    @staticmethod
    def is_own_sign(body: CelestialBody, sign: ZodiacSign) -> bool:
        return sign in OWN_SIGNS[body]
