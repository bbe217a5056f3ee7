from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Sequence, Tuple

from jyotish.domain.kundali.constants import CelestialBody


class CoordinateSystem(str, Enum):
    SIDEREAL = "sidereal"
    TROPICAL = "tropical"


class CalculationFlag(str, Enum):
    """
    Optional calculation flags understood by oracle implementations.
    """
    SPEED = "speed"
    TOPOCENTRIC = "topocentric"
    TRUE_POSITION = "true_position"


@dataclass(frozen=True)
class BodyCoordinates:
    """
    Raw ecliptic coordinates of one body at one instant.
    """
    longitude: float
    latitude: float
    distance: float
    speed_longitude: float = 0.0
    speed_latitude: float = 0.0
    speed_distance: float = 0.0


@dataclass(frozen=True)
class HouseCusps:
    """
    House cusp longitudes (house 1 first) plus the angles.
    """
    cusps: Tuple[float, ...]
    ascendant: float
    midheaven: float

    def __post_init__(self):
        if len(self.cusps) != 12:
            raise ValueError(f"Expected 12 house cusps, got {len(self.cusps)}")


class EphemerisOracle(ABC):
    """
    Narrow interface to the external ephemeris.

    Implementations:
    - Raise OracleFailure(code, message) on any failure
    - Never retry
    - Are only asked for observed bodies (Ketu is derived by callers)
    """

    @abstractmethod
    def position(
        self,
        instant: datetime,
        body: CelestialBody,
        coordinate_system: CoordinateSystem,
        flags: Sequence[CalculationFlag] = (CalculationFlag.SPEED,),
    ) -> BodyCoordinates:
        raise NotImplementedError

    @abstractmethod
    def houses(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
        house_system: str,
        coordinate_system: CoordinateSystem,
    ) -> HouseCusps:
        raise NotImplementedError

    @property
    @abstractmethod
    def ayanamsa_name(self) -> str:
        """
        Name of the sidereal mode every sidereal result is computed with.
        """
        raise NotImplementedError

    @abstractmethod
    def ayanamsa(self, instant: datetime) -> float:
        """
        Sidereal offset (degrees) in effect at `instant`.
        """
        raise NotImplementedError
