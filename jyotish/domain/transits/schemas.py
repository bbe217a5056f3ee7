from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict

from jyotish.domain.kundali.constants import CelestialBody, Nakshatra, ZodiacSign
from jyotish.domain.kundali.schemas import KundaliChart


# ─────────────────────────────────────────────
# Transit Schemas
# ─────────────────────────────────────────────

class TransitPlanet(BaseModel):
    """
    Represents a body's transit position at a given time.
    """
    model_config = ConfigDict(frozen=True)

    body: CelestialBody
    longitude: float
    sign: ZodiacSign
    degree: float
    nakshatra: Nakshatra
    retrograde: bool = False


class TransitChart(BaseModel):
    """
    Represents a full transit chart for a specific instant.
    """
    timestamp: datetime
    planets: Dict[CelestialBody, TransitPlanet]


class SignIngress(BaseModel):
    """
    A body moving from one sign into the next.
    """
    model_config = ConfigDict(frozen=True)

    body: CelestialBody
    at: datetime
    from_sign: ZodiacSign
    to_sign: ZodiacSign
    retrograde: bool = False


# ─────────────────────────────────────────────
# Gochar Schemas
# ─────────────────────────────────────────────

class GocharPlanet(BaseModel):
    """
    Represents a body's gochar (relative position).
    """
    body: CelestialBody
    from_lagna_house: int
    from_moon_house: int


class SadeSati(BaseModel):
    """
    Saturn's transit relative to the natal Moon.
    """
    status: str
    description: str
    saturn_sign: ZodiacSign
    moon_sign: ZodiacSign


class Gochar(BaseModel):
    """
    Represents gochar interpretation base data.
    """
    planets: Dict[CelestialBody, GocharPlanet]
    sade_sati: Optional[SadeSati] = None


class Varshaphal(BaseModel):
    """
    Annual chart cast for the Sun's return to its natal longitude.
    """
    year: int
    solar_return: datetime
    natal_sun_longitude: float
    chart: KundaliChart
