"""
Yoga detection.

Every yoga is an independent rule: a name, a strength weight and a
predicate over the chart. A predicate returns the bodies involved when
the yoga is formed, or None. Rules never depend on one another, so the
order of YOGA_RULES does not affect the result.
"""

import logging
from typing import Callable, List, NamedTuple, Optional, Tuple

from jyotish.config import Settings, settings as default_settings
from jyotish.domain.kundali import angles
from jyotish.domain.kundali.constants import (
    CelestialBody,
    KENDRA_HOUSES,
    UPACHAYA_HOUSES,
)
from jyotish.domain.kundali.derived.dignity import DignityClassifier, DEBILITATION
from jyotish.domain.kundali.derived.schemas import YogaMatch
from jyotish.domain.kundali.schemas import KundaliChart

logger = logging.getLogger(__name__)

Bodies = Optional[List[CelestialBody]]
Predicate = Callable[[KundaliChart, float], Bodies]


class YogaRule(NamedTuple):
    name: str
    weight: float
    predicate: Predicate


# Planets that can flank the Moon (Sun and the nodes do not count)
MOON_FLANK_BODIES: Tuple[CelestialBody, ...] = (
    CelestialBody.MARS,
    CelestialBody.MERCURY,
    CelestialBody.JUPITER,
    CelestialBody.VENUS,
    CelestialBody.SATURN,
)

ADHI_BENEFICS: Tuple[CelestialBody, ...] = (
    CelestialBody.JUPITER,
    CelestialBody.VENUS,
    CelestialBody.MERCURY,
)

PARVATA_BENEFICS: Tuple[CelestialBody, ...] = ADHI_BENEFICS
PARVATA_MALEFICS: Tuple[CelestialBody, ...] = (
    CelestialBody.SUN,
    CelestialBody.MARS,
    CelestialBody.SATURN,
)

# Nodes have no debilitation cancellation
NEECHABHANGA_BODIES: Tuple[CelestialBody, ...] = (
    CelestialBody.SUN,
    CelestialBody.MOON,
    CelestialBody.MARS,
    CelestialBody.MERCURY,
    CelestialBody.JUPITER,
    CelestialBody.VENUS,
    CelestialBody.SATURN,
)

KENDRA_OFFSETS = frozenset({1, 4, 7, 10})

# Every formed yoga carries the same weight
FULL_STRENGTH = 1.0


# ─────────────────────────────────────────────
# Predicate shapes
# ─────────────────────────────────────────────

def conjunction(first: CelestialBody, second: CelestialBody) -> Predicate:
    def predicate(kundali: KundaliChart, orb: float) -> Bodies:
        a = kundali.placement(first)
        b = kundali.placement(second)
        if angles.angular_separation(a.longitude, b.longitude) <= orb:
            return [first, second]
        return None
    return predicate


def same_house(first: CelestialBody, second: CelestialBody) -> Predicate:
    def predicate(kundali: KundaliChart, orb: float) -> Bodies:
        if kundali.placement(first).house == kundali.placement(second).house:
            return [first, second]
        return None
    return predicate


def house_offset_in(
    reference: CelestialBody,
    candidates: Tuple[CelestialBody, ...],
    offsets: frozenset,
    involve_reference: bool = True,
) -> Predicate:
    """
    Candidates whose house, counted inclusively from the reference
    body's house, falls in `offsets`.
    """
    def predicate(kundali: KundaliChart, orb: float) -> Bodies:
        origin = kundali.placement(reference).house
        found = [
            body for body in candidates
            if angles.house_offset(origin, kundali.placement(body).house) in offsets
        ]
        if not found:
            return None
        return ([reference] if involve_reference else []) + found
    return predicate


def mahapurusha(body: CelestialBody) -> Predicate:
    def predicate(kundali: KundaliChart, orb: float) -> Bodies:
        placement = kundali.placement(body)
        if placement.house not in KENDRA_HOUSES:
            return None
        strong = (
            DignityClassifier.is_own_sign(body, placement.sign)
            or DignityClassifier.is_exalted(body, placement.sign)
        )
        return [body] if strong else None
    return predicate


# ─────────────────────────────────────────────
# Moon-flank predicates
# ─────────────────────────────────────────────

def _flanking(kundali: KundaliChart, offset: int) -> List[CelestialBody]:
    origin = kundali.placement(CelestialBody.MOON).house
    return [
        body for body in MOON_FLANK_BODIES
        if angles.house_offset(origin, kundali.placement(body).house) == offset
    ]


def _sunapha(kundali: KundaliChart, orb: float) -> Bodies:
    return _flanking(kundali, 2) or None


def _anapha(kundali: KundaliChart, orb: float) -> Bodies:
    return _flanking(kundali, 12) or None


def _durudhara(kundali: KundaliChart, orb: float) -> Bodies:
    second = _flanking(kundali, 2)
    twelfth = _flanking(kundali, 12)
    if second and twelfth:
        return second + twelfth
    return None


def _kemadruma(kundali: KundaliChart, orb: float) -> Bodies:
    if _flanking(kundali, 2) or _flanking(kundali, 12):
        return None
    return [CelestialBody.MOON]


# ─────────────────────────────────────────────
# Combination predicates
# ─────────────────────────────────────────────

def _parvata(kundali: KundaliChart, orb: float) -> Bodies:
    benefics = [
        b for b in PARVATA_BENEFICS
        if kundali.placement(b).house in KENDRA_HOUSES
    ]
    malefics = [
        b for b in PARVATA_MALEFICS
        if kundali.placement(b).house in UPACHAYA_HOUSES
    ]
    if benefics and malefics:
        return benefics + malefics
    return None


def _neechabhanga(kundali: KundaliChart, orb: float) -> Bodies:
    cancelled: List[CelestialBody] = []
    for body in NEECHABHANGA_BODIES:
        placement = kundali.placement(body)
        if placement.sign != DEBILITATION[body].sign:
            continue
        lord = angles.sign_lord(placement.sign)
        if kundali.placement(lord).house in KENDRA_HOUSES:
            cancelled.append(body)
    return cancelled or None


YOGA_RULES: Tuple[YogaRule, ...] = (
    YogaRule("Raja", FULL_STRENGTH, conjunction(CelestialBody.JUPITER, CelestialBody.SATURN)),
    YogaRule(
        "Gajakesari", FULL_STRENGTH,
        house_offset_in(CelestialBody.MOON, (CelestialBody.JUPITER,), KENDRA_OFFSETS),
    ),
    YogaRule("Budhaditya", FULL_STRENGTH, same_house(CelestialBody.SUN, CelestialBody.MERCURY)),
    YogaRule("Ruchaka", FULL_STRENGTH, mahapurusha(CelestialBody.MARS)),
    YogaRule("Bhadra", FULL_STRENGTH, mahapurusha(CelestialBody.MERCURY)),
    YogaRule("Hamsa", FULL_STRENGTH, mahapurusha(CelestialBody.JUPITER)),
    YogaRule("Malavya", FULL_STRENGTH, mahapurusha(CelestialBody.VENUS)),
    YogaRule("Shasha", FULL_STRENGTH, mahapurusha(CelestialBody.SATURN)),
    YogaRule(
        "Adhi", FULL_STRENGTH,
        house_offset_in(
            CelestialBody.MOON, ADHI_BENEFICS, frozenset({6, 7, 8}),
            involve_reference=False,
        ),
    ),
    YogaRule("Chandra Mangala", FULL_STRENGTH, same_house(CelestialBody.MOON, CelestialBody.MARS)),
    YogaRule("Sunapha", FULL_STRENGTH, _sunapha),
    YogaRule("Anapha", FULL_STRENGTH, _anapha),
    YogaRule("Durudhara", FULL_STRENGTH, _durudhara),
    YogaRule("Kemadruma", FULL_STRENGTH, _kemadruma),
    YogaRule("Parvata", FULL_STRENGTH, _parvata),
    YogaRule("Neechabhanga Raja", FULL_STRENGTH, _neechabhanga),
)


class PatternDetector:
    """
    Evaluates yoga rules against a kundali chart.

    This detector:
    - Evaluates every rule independently
    - Emits at most one match per rule
    - Keeps all matches
    """

    def __init__(
        self,
        rules: Tuple[YogaRule, ...] = YOGA_RULES,
        settings: Optional[Settings] = None,
    ):
        self.rules = rules
        self.conjunction_orb = (settings or default_settings).CONJUNCTION_ORB

    def detect(self, kundali: KundaliChart) -> List[YogaMatch]:
        matches: List[YogaMatch] = []

        for rule in self.rules:
            bodies = rule.predicate(kundali, self.conjunction_orb)
            if bodies is None:
                continue
            matches.append(
                YogaMatch(name=rule.name, strength=rule.weight, planets=bodies)
            )

        logger.debug(f"Detected {len(matches)} yogas: {[m.name for m in matches]}")
        return matches
