from enum import Enum
from typing import Dict, FrozenSet, Tuple


# ─────────────────────────────────────────────
# Bodies
# ─────────────────────────────────────────────

class CelestialBody(str, Enum):
    """
    The nine grahas of a Vedic chart.

    Ketu is never observed directly; it is always derived from Rahu.
    """
    SUN = "Sun"
    MOON = "Moon"
    MARS = "Mars"
    MERCURY = "Mercury"
    JUPITER = "Jupiter"
    VENUS = "Venus"
    SATURN = "Saturn"
    RAHU = "Rahu"
    KETU = "Ketu"


# Order in which bodies are resolved; Rahu must precede Ketu
BODY_ORDER: Tuple[CelestialBody, ...] = tuple(CelestialBody)

OBSERVED_BODIES: Tuple[CelestialBody, ...] = tuple(
    b for b in BODY_ORDER if b is not CelestialBody.KETU
)

NODES: FrozenSet[CelestialBody] = frozenset({CelestialBody.RAHU, CelestialBody.KETU})


# ─────────────────────────────────────────────
# Signs
# ─────────────────────────────────────────────

class ZodiacSign(str, Enum):
    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"

    @property
    def index(self) -> int:
        return SIGNS.index(self)

    def shifted(self, offset: int) -> "ZodiacSign":
        """
        Sign `offset` places forward in the zodiac (cyclic).
        """
        return SIGNS[(self.index + offset) % 12]


SIGNS: Tuple[ZodiacSign, ...] = tuple(ZodiacSign)

SIGN_SPAN = 30.0


# ─────────────────────────────────────────────
# Nakshatras
# ─────────────────────────────────────────────

class Nakshatra(str, Enum):
    ASHWINI = "Ashwini"
    BHARANI = "Bharani"
    KRITTIKA = "Krittika"
    ROHINI = "Rohini"
    MRIGASHIRA = "Mrigashira"
    ARDRA = "Ardra"
    PUNARVASU = "Punarvasu"
    PUSHYA = "Pushya"
    ASHLESHA = "Ashlesha"
    MAGHA = "Magha"
    PURVA_PHALGUNI = "Purva Phalguni"
    UTTARA_PHALGUNI = "Uttara Phalguni"
    HASTA = "Hasta"
    CHITRA = "Chitra"
    SWATI = "Swati"
    VISHAKHA = "Vishakha"
    ANURADHA = "Anuradha"
    JYESHTHA = "Jyeshtha"
    MULA = "Mula"
    PURVA_ASHADHA = "Purva Ashadha"
    UTTARA_ASHADHA = "Uttara Ashadha"
    SHRAVANA = "Shravana"
    DHANISHTA = "Dhanishta"
    SHATABHISHA = "Shatabhisha"
    PURVA_BHADRAPADA = "Purva Bhadrapada"
    UTTARA_BHADRAPADA = "Uttara Bhadrapada"
    REVATI = "Revati"

    @property
    def index(self) -> int:
        return NAKSHATRAS.index(self)


NAKSHATRAS: Tuple[Nakshatra, ...] = tuple(Nakshatra)

NAKSHATRA_SPAN = 360.0 / 27.0  # 13.333333...
PADA_SPAN = NAKSHATRA_SPAN / 4.0

# Nakshatra lords repeat this order three times (Ashwini → Ketu, Bharani → Venus, ...)
NAKSHATRA_LORDS: Tuple[CelestialBody, ...] = (
    CelestialBody.KETU,
    CelestialBody.VENUS,
    CelestialBody.SUN,
    CelestialBody.MOON,
    CelestialBody.MARS,
    CelestialBody.RAHU,
    CelestialBody.JUPITER,
    CelestialBody.SATURN,
    CelestialBody.MERCURY,
)


# ─────────────────────────────────────────────
# Sign lordship & houses
# ─────────────────────────────────────────────

SIGN_LORDS: Dict[ZodiacSign, CelestialBody] = {
    ZodiacSign.ARIES: CelestialBody.MARS,
    ZodiacSign.TAURUS: CelestialBody.VENUS,
    ZodiacSign.GEMINI: CelestialBody.MERCURY,
    ZodiacSign.CANCER: CelestialBody.MOON,
    ZodiacSign.LEO: CelestialBody.SUN,
    ZodiacSign.VIRGO: CelestialBody.MERCURY,
    ZodiacSign.LIBRA: CelestialBody.VENUS,
    ZodiacSign.SCORPIO: CelestialBody.MARS,
    ZodiacSign.SAGITTARIUS: CelestialBody.JUPITER,
    ZodiacSign.CAPRICORN: CelestialBody.SATURN,
    ZodiacSign.AQUARIUS: CelestialBody.SATURN,
    ZodiacSign.PISCES: CelestialBody.JUPITER,
}

HOUSE_COUNT = 12

KENDRA_HOUSES: FrozenSet[int] = frozenset({1, 4, 7, 10})
UPACHAYA_HOUSES: FrozenSet[int] = frozenset({3, 6, 10, 11})

# Natural (naisargika) classification
BENEFIC_BODIES: FrozenSet[CelestialBody] = frozenset({
    CelestialBody.JUPITER,
    CelestialBody.VENUS,
    CelestialBody.MERCURY,
    CelestialBody.MOON,
    CelestialBody.SUN,
})
MALEFIC_BODIES: FrozenSet[CelestialBody] = frozenset({
    CelestialBody.SATURN,
    CelestialBody.MARS,
    CelestialBody.RAHU,
    CelestialBody.KETU,
})
