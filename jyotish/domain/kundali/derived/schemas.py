from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field

from jyotish.domain.kundali.constants import CelestialBody


# ─────────────────────────────────────────────
# Dignity
# ─────────────────────────────────────────────

class DignityState(str, Enum):
    DEEP_EXALTATION = "Deep Exaltation"
    EXALTED = "Exalted"
    DEEP_DEBILITATION = "Deep Debilitation"
    DEBILITATED = "Debilitated"
    OWN_SIGN = "Own Sign"
    BENEFIC = "Benefic"
    MALEFIC = "Malefic"
    RETROGRADE = "Retrograde"


class DignityInfo(BaseModel):
    """
    Final dignity state of a body plus the independent flags
    it was derived from.
    """
    model_config = ConfigDict(frozen=True)

    body: CelestialBody
    state: DignityState
    exalted: bool = False
    debilitated: bool = False
    own_sign: bool = False
    moolatrikona: bool = False
    retrograde: bool = False


# ─────────────────────────────────────────────
# Atomic Derived Facts
# ─────────────────────────────────────────────

class Dosha(BaseModel):
    """
    Represents a dosha and its presence.
    """
    name: str
    present: bool
    type: Optional[str] = None
    severity: Optional[str] = None
    description: Optional[str] = None


class YogaMatch(BaseModel):
    """
    Represents a yoga formed in the chart.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    strength: float
    planets: List[CelestialBody] = Field(default_factory=list)


class Aspect(BaseModel):
    """
    Angular relationship between two bodies.
    """
    model_config = ConfigDict(frozen=True)

    first: CelestialBody
    second: CelestialBody
    kind: str
    separation: float
    orb: float


class HouseStrength(BaseModel):
    """
    Represents strength evaluation of a house.
    """
    house: int
    strength: str
    score: int = 0
    reasons: List[str] = Field(default_factory=list)


class PlanetStrength(BaseModel):
    """
    Shadbala components and ashtakavarga points of one body.
    """
    model_config = ConfigDict(frozen=True)

    body: CelestialBody
    sthana: float
    dig: float
    kala: float
    chesta: float
    naisargika: float
    drik: float
    ashtakavarga: int

    @computed_field
    @property
    def shadbala(self) -> float:
        return self.sthana + self.dig + self.kala + self.chesta + self.naisargika + self.drik


# ─────────────────────────────────────────────
# Aggregated Derived Astrology
# ─────────────────────────────────────────────

class DerivedAstrology(BaseModel):
    """
    Represents all derived astrology from a kundali.
    """

    dignities: Dict[CelestialBody, DignityInfo] = Field(default_factory=dict)
    yogas: List[YogaMatch] = Field(default_factory=list)
    doshas: List[Dosha] = Field(default_factory=list)
    aspects: List[Aspect] = Field(default_factory=list)
    house_strengths: Dict[int, HouseStrength] = Field(default_factory=dict)
    strengths: Dict[CelestialBody, PlanetStrength] = Field(default_factory=dict)
