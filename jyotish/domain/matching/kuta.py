"""
Kundali Milan (Ashta Koot Matching)

Calculates compatibility score based on 8 factors (36 max points)
from the Moon sign and Moon nakshatra of both charts.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple

from jyotish.domain.kundali import angles
from jyotish.domain.kundali.constants import (
    CelestialBody,
    Nakshatra,
    ZodiacSign,
)
from jyotish.domain.kundali.schemas import KundaliChart, Placement
from jyotish.domain.matching.schemas import CompatibilityResult, KutaScore

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
# Tags
# ─────────────────────────────────────────────

class Varna(str, Enum):
    SHUDRA = "Shudra"
    VAISHYA = "Vaishya"
    KSHATRIYA = "Kshatriya"
    BRAHMIN = "Brahmin"


class Vashya(str, Enum):
    MANAVA = "Manava"
    VANCHAR = "Vanchar"
    CHATUSHPADA = "Chatushpada"
    JALCHAR = "Jalchar"
    KEETA = "Keeta"


class Yoni(str, Enum):
    HORSE = "Horse"
    ELEPHANT = "Elephant"
    SHEEP = "Sheep"
    SERPENT = "Serpent"
    DOG = "Dog"
    CAT = "Cat"
    RAT = "Rat"
    COW = "Cow"
    BUFFALO = "Buffalo"
    TIGER = "Tiger"
    DEER = "Deer"
    MONKEY = "Monkey"
    MONGOOSE = "Mongoose"
    LION = "Lion"


class Gana(str, Enum):
    DEVA = "Deva"
    MANUSHYA = "Manushya"
    RAKSHASA = "Rakshasa"


class Nadi(str, Enum):
    ADI = "Adi"
    MADHYA = "Madhya"
    ANTYA = "Antya"


class Relation(str, Enum):
    FRIEND = "friend"
    NEUTRAL = "neutral"
    ENEMY = "enemy"


# ─────────────────────────────────────────────
# Lookup Tables
# ─────────────────────────────────────────────

VARNA_HIERARCHY: Tuple[Varna, ...] = tuple(Varna)  # 0 = lowest

VARNA_BY_SIGN: Dict[ZodiacSign, Varna] = {
    ZodiacSign.CANCER: Varna.BRAHMIN,
    ZodiacSign.SCORPIO: Varna.BRAHMIN,
    ZodiacSign.PISCES: Varna.BRAHMIN,
    ZodiacSign.ARIES: Varna.KSHATRIYA,
    ZodiacSign.LEO: Varna.KSHATRIYA,
    ZodiacSign.SAGITTARIUS: Varna.KSHATRIYA,
    ZodiacSign.TAURUS: Varna.VAISHYA,
    ZodiacSign.VIRGO: Varna.VAISHYA,
    ZodiacSign.CAPRICORN: Varna.VAISHYA,
    ZodiacSign.GEMINI: Varna.SHUDRA,
    ZodiacSign.LIBRA: Varna.SHUDRA,
    ZodiacSign.AQUARIUS: Varna.SHUDRA,
}

VASHYA_BY_SIGN: Dict[ZodiacSign, Vashya] = {
    ZodiacSign.ARIES: Vashya.CHATUSHPADA,
    ZodiacSign.TAURUS: Vashya.CHATUSHPADA,
    ZodiacSign.GEMINI: Vashya.MANAVA,
    ZodiacSign.CANCER: Vashya.JALCHAR,
    ZodiacSign.LEO: Vashya.VANCHAR,
    ZodiacSign.VIRGO: Vashya.MANAVA,
    ZodiacSign.LIBRA: Vashya.MANAVA,
    ZodiacSign.SCORPIO: Vashya.KEETA,
    ZodiacSign.SAGITTARIUS: Vashya.MANAVA,
    ZodiacSign.CAPRICORN: Vashya.JALCHAR,
    ZodiacSign.AQUARIUS: Vashya.MANAVA,
    ZodiacSign.PISCES: Vashya.JALCHAR,
}

# Cross-group pairs that still score; same group always scores 2
VASHYA_COMPAT: Dict[FrozenSet[Vashya], float] = {
    frozenset({Vashya.MANAVA, Vashya.CHATUSHPADA}): 1,
}

# Indexed by nakshatra (Ashwini → Revati)
YONI_BY_NAKSHATRA: Tuple[Yoni, ...] = (
    Yoni.HORSE, Yoni.ELEPHANT, Yoni.SHEEP, Yoni.SERPENT, Yoni.SERPENT, Yoni.DOG,
    Yoni.CAT, Yoni.SHEEP, Yoni.CAT, Yoni.RAT, Yoni.RAT,
    Yoni.COW, Yoni.BUFFALO, Yoni.TIGER, Yoni.BUFFALO, Yoni.TIGER,
    Yoni.DEER, Yoni.DEER, Yoni.DOG, Yoni.MONKEY, Yoni.MONGOOSE,
    Yoni.MONKEY, Yoni.LION, Yoni.HORSE, Yoni.LION,
    Yoni.COW, Yoni.ELEPHANT,
)

YONI_ENEMIES: FrozenSet[FrozenSet[Yoni]] = frozenset({
    frozenset({Yoni.HORSE, Yoni.BUFFALO}),
    frozenset({Yoni.ELEPHANT, Yoni.LION}),
    frozenset({Yoni.SHEEP, Yoni.MONKEY}),
    frozenset({Yoni.SERPENT, Yoni.MONGOOSE}),
    frozenset({Yoni.DOG, Yoni.DEER}),
    frozenset({Yoni.CAT, Yoni.RAT}),
    frozenset({Yoni.TIGER, Yoni.COW}),
})
YONI_SAME = 4
YONI_NEUTRAL = 2
YONI_ENEMY = 0

GANA_BY_NAKSHATRA: Tuple[Gana, ...] = (
    Gana.DEVA, Gana.MANUSHYA, Gana.RAKSHASA, Gana.MANUSHYA, Gana.DEVA, Gana.MANUSHYA,
    Gana.DEVA, Gana.DEVA, Gana.RAKSHASA, Gana.RAKSHASA, Gana.MANUSHYA,
    Gana.MANUSHYA, Gana.DEVA, Gana.RAKSHASA, Gana.DEVA, Gana.RAKSHASA,
    Gana.DEVA, Gana.RAKSHASA, Gana.RAKSHASA, Gana.MANUSHYA, Gana.MANUSHYA,
    Gana.DEVA, Gana.RAKSHASA, Gana.RAKSHASA, Gana.MANUSHYA,
    Gana.MANUSHYA, Gana.DEVA,
)

# Keyed (boy, girl)
GANA_SCORES: Dict[Tuple[Gana, Gana], float] = {
    (Gana.DEVA, Gana.DEVA): 6,
    (Gana.MANUSHYA, Gana.MANUSHYA): 6,
    (Gana.RAKSHASA, Gana.RAKSHASA): 6,
    (Gana.DEVA, Gana.MANUSHYA): 5,
    (Gana.MANUSHYA, Gana.DEVA): 5,
    (Gana.MANUSHYA, Gana.RAKSHASA): 1,
    (Gana.RAKSHASA, Gana.MANUSHYA): 1,
    (Gana.DEVA, Gana.RAKSHASA): 0,
    (Gana.RAKSHASA, Gana.DEVA): 0,
}

NADI_BY_NAKSHATRA: Tuple[Nadi, ...] = (
    Nadi.ADI, Nadi.MADHYA, Nadi.ANTYA, Nadi.ANTYA, Nadi.MADHYA, Nadi.ADI,
    Nadi.ADI, Nadi.MADHYA, Nadi.ANTYA, Nadi.ANTYA, Nadi.MADHYA,
    Nadi.ADI, Nadi.ADI, Nadi.MADHYA, Nadi.ANTYA, Nadi.ANTYA,
    Nadi.MADHYA, Nadi.ADI, Nadi.ADI, Nadi.MADHYA, Nadi.ANTYA,
    Nadi.ANTYA, Nadi.MADHYA, Nadi.ADI, Nadi.ADI,
    Nadi.MADHYA, Nadi.ANTYA,
)

_F, _N, _E = Relation.FRIEND, Relation.NEUTRAL, Relation.ENEMY

# How the first planet regards the second
PLANET_FRIENDSHIP: Dict[CelestialBody, Dict[CelestialBody, Relation]] = {
    CelestialBody.SUN: {
        CelestialBody.MOON: _F, CelestialBody.MARS: _F, CelestialBody.JUPITER: _F,
        CelestialBody.VENUS: _E, CelestialBody.SATURN: _E, CelestialBody.MERCURY: _N,
    },
    CelestialBody.MOON: {
        CelestialBody.SUN: _F, CelestialBody.MERCURY: _F, CelestialBody.MARS: _N,
        CelestialBody.JUPITER: _N, CelestialBody.VENUS: _N, CelestialBody.SATURN: _N,
    },
    CelestialBody.MARS: {
        CelestialBody.SUN: _F, CelestialBody.MOON: _F, CelestialBody.JUPITER: _F,
        CelestialBody.VENUS: _N, CelestialBody.SATURN: _N, CelestialBody.MERCURY: _E,
    },
    CelestialBody.MERCURY: {
        CelestialBody.SUN: _F, CelestialBody.VENUS: _F, CelestialBody.MOON: _E,
        CelestialBody.MARS: _N, CelestialBody.JUPITER: _N, CelestialBody.SATURN: _N,
    },
    CelestialBody.JUPITER: {
        CelestialBody.SUN: _F, CelestialBody.MOON: _F, CelestialBody.MARS: _F,
        CelestialBody.VENUS: _E, CelestialBody.SATURN: _N, CelestialBody.MERCURY: _E,
    },
    CelestialBody.VENUS: {
        CelestialBody.MERCURY: _F, CelestialBody.SATURN: _F, CelestialBody.SUN: _E,
        CelestialBody.MOON: _E, CelestialBody.MARS: _N, CelestialBody.JUPITER: _N,
    },
    CelestialBody.SATURN: {
        CelestialBody.MERCURY: _F, CelestialBody.VENUS: _F, CelestialBody.SUN: _E,
        CelestialBody.MOON: _E, CelestialBody.MARS: _E, CelestialBody.JUPITER: _N,
    },
}

# Keyed by the set of both relations (a single member when they agree)
MAITRI_POINTS: Dict[FrozenSet[Relation], float] = {
    frozenset({_F}): 5,
    frozenset({_F, _N}): 4,
    frozenset({_N}): 3,
    frozenset({_F, _E}): 1,
    frozenset({_N, _E}): 0.5,
    frozenset({_E}): 0,
}

# Unordered sign distances (counted both ways) that cause Bhakoot Dosha
BHAKOOT_BAD: FrozenSet[FrozenSet[int]] = frozenset({
    frozenset({2, 12}),
    frozenset({5, 9}),
    frozenset({6, 8}),
})

# Tara positions (1–9) counted as inauspicious
BAD_TARAS = frozenset({3, 5, 7})

VERDICT_BANDS: Tuple[Tuple[float, str], ...] = (
    (25, "Excellent Match"),
    (18, "Good Match"),
    (12, "Average Match"),
)

MAX_SCORE = 36


class CompatibilityScorer:
    """
    Ashta Koot matching between two charts.

    This class:
    - Reads the Moon sign and Moon nakshatra of each chart
    - Scores the eight kutas from static tables
    - Sums them into a 36-point result with a verdict
    """

    def score(
        self,
        boy: KundaliChart,
        girl: KundaliChart,
    ) -> CompatibilityResult:
        """
        Raises MissingPlacement if either chart lacks the Moon.
        """
        return self.score_moons(
            boy.placement(CelestialBody.MOON),
            girl.placement(CelestialBody.MOON),
        )

    def score_moons(
        self,
        boy_moon: Placement,
        girl_moon: Placement,
    ) -> CompatibilityResult:
        boy_sign, girl_sign = boy_moon.sign, girl_moon.sign
        boy_nak, girl_nak = boy_moon.nakshatra, girl_moon.nakshatra

        factors: List[KutaScore] = [
            self.varna(boy_sign, girl_sign),
            self.vashya(boy_sign, girl_sign),
            self.tara(boy_nak, girl_nak),
            self.yoni(boy_nak, girl_nak),
            self.graha_maitri(boy_sign, girl_sign),
            self.gana(boy_nak, girl_nak),
            self.bhakoot(boy_sign, girl_sign),
            self.nadi(boy_nak, girl_nak),
        ]

        total = sum(f.score for f in factors)
        result = CompatibilityResult(
            total_score=total,
            max_score=MAX_SCORE,
            percentage=round((total / MAX_SCORE) * 100, 1),
            verdict=self.verdict(total),
            factors=factors,
        )
        logger.debug(f"Ashta Koot score {total}/{MAX_SCORE} ({result.verdict})")
        return result

    @staticmethod
    def verdict(total: float) -> str:
        for threshold, label in VERDICT_BANDS:
            if total >= threshold:
                return label
        return "Below Average"

    # ─────────────────────────────────────────────
    # Per-Factor Calculations
    # ─────────────────────────────────────────────

    def varna(self, boy_sign: ZodiacSign, girl_sign: ZodiacSign) -> KutaScore:
        """Varna: Boy's Varna >= Girl's Varna = 1 point."""
        boy, girl = VARNA_BY_SIGN[boy_sign], VARNA_BY_SIGN[girl_sign]

        if VARNA_HIERARCHY.index(boy) >= VARNA_HIERARCHY.index(girl):
            score, desc = 1, f"Boy ({boy.value}) is equal or higher than Girl ({girl.value})."
        else:
            score, desc = 0, f"Boy ({boy.value}) is lower than Girl ({girl.value})."

        return KutaScore(
            name="Varna", score=score, max=1, description=desc,
            boy_value=boy.value, girl_value=girl.value, area="Work & Status",
        )

    def vashya(self, boy_sign: ZodiacSign, girl_sign: ZodiacSign) -> KutaScore:
        """Vashya: Compatibility of influence types."""
        boy, girl = VASHYA_BY_SIGN[boy_sign], VASHYA_BY_SIGN[girl_sign]

        if boy == girl:
            score = 2
        else:
            score = VASHYA_COMPAT.get(frozenset({boy, girl}), 0)

        return KutaScore(
            name="Vashya", score=score, max=2,
            description=f"Boy: {boy.value}, Girl: {girl.value}.",
            boy_value=boy.value, girl_value=girl.value, area="Dominance & Control",
        )

    def tara(self, boy_nak: Nakshatra, girl_nak: Nakshatra) -> KutaScore:
        """
        Tara: nakshatra distance counted both ways, 1.5 points for
        each direction that lands on an auspicious tara.
        """
        boy_to_girl = self._tara_number(boy_nak, girl_nak)
        girl_to_boy = self._tara_number(girl_nak, boy_nak)

        score = sum(1.5 for t in (boy_to_girl, girl_to_boy) if t not in BAD_TARAS)

        return KutaScore(
            name="Tara", score=score, max=3,
            description=f"Taras {boy_to_girl} (boy to girl) and {girl_to_boy} (girl to boy).",
            boy_value=boy_nak.value, girl_value=girl_nak.value, area="Destiny & Health",
        )

    def yoni(self, boy_nak: Nakshatra, girl_nak: Nakshatra) -> KutaScore:
        """Yoni: Animal compatibility."""
        boy, girl = YONI_BY_NAKSHATRA[boy_nak.index], YONI_BY_NAKSHATRA[girl_nak.index]

        if boy == girl:
            score, desc = YONI_SAME, f"Same Yoni ({boy.value})."
        elif frozenset({boy, girl}) in YONI_ENEMIES:
            score, desc = YONI_ENEMY, f"{boy.value} and {girl.value} are enemies."
        else:
            score, desc = YONI_NEUTRAL, f"{boy.value} and {girl.value} are neutral."

        return KutaScore(
            name="Yoni", score=score, max=4, description=desc,
            boy_value=boy.value, girl_value=girl.value, area="Physical & Intimacy",
        )

    def graha_maitri(self, boy_sign: ZodiacSign, girl_sign: ZodiacSign) -> KutaScore:
        """Graha Maitri: Friendship between Moon sign lords."""
        boy_lord, girl_lord = angles.sign_lord(boy_sign), angles.sign_lord(girl_sign)

        if boy_lord == girl_lord:
            score, desc = 5, f"Same lord ({boy_lord.value})."
        else:
            relations = frozenset({
                PLANET_FRIENDSHIP[boy_lord][girl_lord],
                PLANET_FRIENDSHIP[girl_lord][boy_lord],
            })
            score = MAITRI_POINTS[relations]
            desc = (
                f"{boy_lord.value} and {girl_lord.value}: "
                f"{', '.join(sorted(r.value for r in relations))}."
            )

        return KutaScore(
            name="Graha Maitri", score=score, max=5, description=desc,
            boy_value=boy_lord.value, girl_value=girl_lord.value, area="Mental Compatibility",
        )

    def gana(self, boy_nak: Nakshatra, girl_nak: Nakshatra) -> KutaScore:
        """Gana: Temperament matching."""
        boy, girl = GANA_BY_NAKSHATRA[boy_nak.index], GANA_BY_NAKSHATRA[girl_nak.index]

        return KutaScore(
            name="Gana", score=GANA_SCORES[(boy, girl)], max=6,
            description=f"Boy: {boy.value}, Girl: {girl.value}.",
            boy_value=boy.value, girl_value=girl.value, area="Temperament & Nature",
        )

    def bhakoot(self, boy_sign: ZodiacSign, girl_sign: ZodiacSign) -> KutaScore:
        """Bhakoot: Moon sign position check."""
        dist1 = (boy_sign.index - girl_sign.index) % 12 + 1
        dist2 = (girl_sign.index - boy_sign.index) % 12 + 1

        if frozenset({dist1, dist2}) in BHAKOOT_BAD:
            score, desc = 0, f"Distance {dist1}/{dist2} indicates Bhakoot Dosha."
        else:
            score, desc = 7, f"No Bhakoot Dosha detected (distance: {dist1}/{dist2})."

        return KutaScore(
            name="Bhakoot", score=score, max=7, description=desc,
            boy_value=boy_sign.value, girl_value=girl_sign.value, area="Love & Prosperity",
        )

    def nadi(self, boy_nak: Nakshatra, girl_nak: Nakshatra) -> KutaScore:
        """Nadi: Genetic compatibility (most critical)."""
        boy, girl = NADI_BY_NAKSHATRA[boy_nak.index], NADI_BY_NAKSHATRA[girl_nak.index]

        if boy == girl:
            score, desc = 0, f"Same Nadi ({boy.value}), Nadi Dosha."
        else:
            score, desc = 8, f"Different Nadis ({boy.value} vs {girl.value})."

        return KutaScore(
            name="Nadi", score=score, max=8, description=desc,
            boy_value=boy.value, girl_value=girl.value, area="Health & Progeny",
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    @staticmethod
    def _tara_number(from_nak: Nakshatra, to_nak: Nakshatra) -> int:
        # Inclusive count, folded into the 1–9 cycle
        distance = (to_nak.index - from_nak.index) % 27 + 1
        return ((distance - 1) % 9) + 1
