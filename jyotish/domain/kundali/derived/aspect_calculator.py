from itertools import combinations
from typing import List, NamedTuple, Optional, Tuple

from jyotish.domain.kundali import angles
from jyotish.domain.kundali.derived.schemas import Aspect
from jyotish.domain.kundali.schemas import KundaliChart


class AspectWindow(NamedTuple):
    kind: str
    exact: float
    low: float
    high: float


# Windows are checked in order; the first containing the separation wins
ASPECT_WINDOWS: Tuple[AspectWindow, ...] = (
    AspectWindow("Conjunction", 0.0, 0.0, 10.0),
    AspectWindow("Sextile", 60.0, 55.0, 65.0),
    AspectWindow("Square", 90.0, 85.0, 95.0),
    AspectWindow("Trine", 120.0, 115.0, 125.0),
    AspectWindow("Opposition", 180.0, 170.0, 180.0),
)


class AspectCalculator:
    """
    Finds pairwise aspects between bodies from their angular separation.
    """

    def calculate(self, kundali: KundaliChart) -> List[Aspect]:
        aspects: List[Aspect] = []

        for first, second in combinations(kundali.planets.values(), 2):
            separation = angles.angular_separation(first.longitude, second.longitude)
            window = self.window_for(separation)
            if window is None:
                continue

            aspects.append(
                Aspect(
                    first=first.body,
                    second=second.body,
                    kind=window.kind,
                    separation=round(separation, 4),
                    orb=round(abs(separation - window.exact), 4),
                )
            )

        return aspects

    @staticmethod
    def window_for(separation: float) -> Optional[AspectWindow]:
        for window in ASPECT_WINDOWS:
            if window.low <= separation <= window.high:
                return window
        return None
