from typing import Dict
from pydantic import BaseModel, ConfigDict, Field

from jyotish.domain.kundali.constants import CelestialBody, ZodiacSign


class DivisionalPosition(BaseModel):
    """
    A body's sign and degree in a divisional chart.

    Houses are whole-sign, counted from the divisional ascendant.
    """
    model_config = ConfigDict(frozen=True)

    sign: ZodiacSign
    degree: float
    house: int = Field(..., ge=1, le=12)
    retrograde: bool = False


class DivisionalChart(BaseModel):
    """
    Represents a single divisional chart (D2, D9, D10).
    """

    chart_type: str
    ascendant: DivisionalPosition
    planets: Dict[CelestialBody, DivisionalPosition]


class DivisionalCharts(BaseModel):
    """
    Container for all divisional charts of a kundali.
    """

    charts: Dict[str, DivisionalChart] = Field(default_factory=dict)
