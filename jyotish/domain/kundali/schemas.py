from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from jyotish.domain.kundali.constants import (
    CelestialBody,
    Nakshatra,
    ZodiacSign,
)
from jyotish.domain.kundali.errors import MissingPlacement


# ─────────────────────────────────────────────
# Core Atomic Schemas
# ─────────────────────────────────────────────

class Placement(BaseModel):
    """
    Represents a single body's resolved position in a chart.
    """
    model_config = ConfigDict(frozen=True)

    body: CelestialBody
    longitude: float
    latitude: float = 0.0
    distance: float = 0.0
    speed: float = 0.0
    speed_latitude: float = 0.0
    sign: ZodiacSign
    degree: float
    nakshatra: Nakshatra
    pada: int = Field(..., ge=1, le=4)
    nakshatra_lord: CelestialBody
    house: int = Field(..., ge=1, le=12)
    retrograde: bool = False


class Ascendant(BaseModel):
    """
    Represents the ascendant (Lagna).
    """
    model_config = ConfigDict(frozen=True)

    longitude: float
    sign: ZodiacSign
    degree: float
    nakshatra: Optional[Nakshatra] = None
    pada: Optional[int] = None


class HouseRecord(BaseModel):
    """
    Represents one bhava: its cusp, sign, lord and occupants.
    """
    model_config = ConfigDict(frozen=True)

    house: int = Field(..., ge=1, le=12)
    cusp: float
    sign: ZodiacSign
    degree: float
    lord: CelestialBody
    occupants: List[CelestialBody] = Field(default_factory=list)


# ─────────────────────────────────────────────
# Core Kundali Schema (D1)
# ─────────────────────────────────────────────

class KundaliChart(BaseModel):
    """
    Represents the core D1 (Rashi) kundali.
    """
    model_config = ConfigDict(frozen=True)

    chart_type: str = "D1"
    ascendant: Ascendant
    houses: List[HouseRecord]
    planets: Dict[CelestialBody, Placement]
    ayanamsa: str
    ayanamsa_value: float = 0.0
    coordinate_system: str = "sidereal"
    house_system: str = "P"

    def placement(self, body: CelestialBody) -> Placement:
        """
        Placement of `body`, or MissingPlacement if it is absent.
        """
        placement = self.planets.get(body)
        if placement is None:
            raise MissingPlacement(body)
        return placement

    def house(self, number: int) -> HouseRecord:
        return self.houses[number - 1]

    def bodies_in_house(self, number: int) -> List[CelestialBody]:
        return [p.body for p in self.planets.values() if p.house == number]
