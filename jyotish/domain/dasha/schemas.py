from datetime import datetime, timedelta
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from jyotish.domain.kundali.constants import CelestialBody, Nakshatra


class DashaLevel(str, Enum):
    MAHA = "maha"
    ANTAR = "antar"
    PRATYANTAR = "pratyantar"


class RulershipPeriod(BaseModel):
    """
    A contiguous interval ruled by one body at one level
    of the Vimshottari hierarchy.
    """
    model_config = ConfigDict(frozen=True)

    lord: CelestialBody
    level: DashaLevel
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


class DashaBalance(BaseModel):
    """
    Where the Moon's nakshatra places the native in the first mahadasha.
    """
    model_config = ConfigDict(frozen=True)

    nakshatra: Nakshatra
    lord: CelestialBody
    fraction_elapsed: float
    balance_years: float


class DashaSelection(BaseModel):
    """
    The maha / antar / pratyantar periods active at an instant.
    """
    model_config = ConfigDict(frozen=True)

    maha: RulershipPeriod
    antar: RulershipPeriod
    pratyantar: RulershipPeriod


class MahaDasha(BaseModel):
    period: RulershipPeriod
    antardashas: List[RulershipPeriod] = Field(default_factory=list)


class DashaTimeline(BaseModel):
    """
    Full Vimshottari sequence from birth with antardashas.
    """
    balance: DashaBalance
    mahadashas: List[MahaDasha] = Field(default_factory=list)
