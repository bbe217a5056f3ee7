from typing import List
from pydantic import BaseModel, ConfigDict, Field


class KutaScore(BaseModel):
    """
    Score of one Ashta Koot factor.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    score: float
    max: float
    description: str
    boy_value: str
    girl_value: str
    area: str


class CompatibilityResult(BaseModel):
    """
    Ashta Koot matching result (36 points max).
    """
    model_config = ConfigDict(frozen=True)

    total_score: float = Field(..., ge=0, le=36)
    max_score: float = 36
    percentage: float = Field(..., ge=0, le=100)
    verdict: str
    factors: List[KutaScore] = Field(default_factory=list)
