import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List

from jyotish.domain.kundali import angles
from jyotish.domain.kundali.constants import BODY_ORDER, CelestialBody, OBSERVED_BODIES
from jyotish.domain.kundali.engine import BirthInput, KundaliEngine
from jyotish.domain.kundali.errors import CalculationError, InvalidBirthDataError
from jyotish.domain.transits.schemas import (
    SignIngress,
    TransitChart,
    TransitPlanet,
    Varshaphal,
)
from jyotish.ephemeris.oracle import BodyCoordinates

logger = logging.getLogger(__name__)

TROPICAL_YEAR_DAYS = 365.2422

# Half-width of the bracket searched around the estimated return
SOLAR_RETURN_WINDOW = timedelta(days=5)
SOLAR_RETURN_TOLERANCE = timedelta(seconds=1)


class TransitEngine:
    """
    Calculates planetary transits for a given instant.

    This engine:
    - Resolves bodies through the kundali engine's oracle
    - Derives Ketu the same way natal charts do
    - Locates solar returns for the annual (varshaphal) chart
    - Returns pure domain schemas
    """

    def __init__(self, engine: KundaliEngine):
        self.engine = engine

    def calculate(
        self,
        timestamp: datetime
    ) -> TransitChart:
        """
        Calculate transit chart for a given instant.
        """
        timestamp = self._as_utc(timestamp)

        coordinates: Dict[CelestialBody, BodyCoordinates] = {
            body: self.engine.position_of(timestamp, body)
            for body in OBSERVED_BODIES
        }
        coordinates[CelestialBody.KETU] = angles.derive_descending_node(
            coordinates[CelestialBody.RAHU]
        )

        planets = {
            body: self._transit_planet(body, coordinates[body])
            for body in BODY_ORDER
        }

        return TransitChart(timestamp=timestamp, planets=planets)

    def ingresses(
        self,
        body: CelestialBody,
        start: datetime,
        days: int
    ) -> List[SignIngress]:
        """
        Sign changes of `body` over `days` days, found by a daily scan.

        Each ingress is stamped with the first sampled day in the new sign.
        """
        start = self._as_utc(start)
        events: List[SignIngress] = []

        previous = angles.sign_of(self.engine.position_of(start, body).longitude)
        for day in range(1, days + 1):
            at = start + timedelta(days=day)
            coords = self.engine.position_of(at, body)
            sign = angles.sign_of(coords.longitude)
            if sign != previous:
                events.append(
                    SignIngress(
                        body=body,
                        at=at,
                        from_sign=previous,
                        to_sign=sign,
                        retrograde=coords.speed_longitude < 0,
                    )
                )
                previous = sign

        logger.debug(f"{body.value}: {len(events)} ingresses in {days} days from {start.date()}")
        return events

    # ─────────────────────────────────────────────
    # Varshaphal
    # ─────────────────────────────────────────────

    def varshaphal(self, birth: BirthInput, year: int) -> Varshaphal:
        """
        Annual chart for the solar return falling in `year`,
        cast at the birth location.
        """
        elapsed = year - birth.birth_date.year
        if elapsed < 0:
            raise InvalidBirthDataError(f"Year {year} precedes the birth year {birth.birth_date.year}")

        birth_utc = birth.to_utc()
        natal_sun = self.engine.position_of(birth_utc, CelestialBody.SUN).longitude
        estimate = birth_utc + timedelta(days=elapsed * TROPICAL_YEAR_DAYS)
        instant = self.solar_return(natal_sun, estimate)

        logger.info(f"Solar return for {year}: {instant.isoformat()}")
        chart = self.engine.generate_at(instant, birth.latitude, birth.longitude, birth.ayanamsa)
        return Varshaphal(
            year=year,
            solar_return=instant,
            natal_sun_longitude=natal_sun,
            chart=chart,
        )

    def solar_return(self, natal_sun_longitude: float, estimate: datetime) -> datetime:
        """
        Instant near `estimate` when the Sun returns to its natal longitude.

        Bisects on the Sun's signed distance from the natal longitude,
        which rises through zero across the bracket.
        """
        low = self._as_utc(estimate) - SOLAR_RETURN_WINDOW
        high = self._as_utc(estimate) + SOLAR_RETURN_WINDOW

        before = self._sun_offset(low, natal_sun_longitude)
        after = self._sun_offset(high, natal_sun_longitude)
        if before > 0 or after < 0:
            raise CalculationError(
                f"Sun does not return to {natal_sun_longitude:.4f} between "
                f"{low.isoformat()} and {high.isoformat()}"
            )

        while high - low > SOLAR_RETURN_TOLERANCE:
            mid = low + (high - low) / 2
            if self._sun_offset(mid, natal_sun_longitude) < 0:
                low = mid
            else:
                high = mid

        return low + (high - low) / 2

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _sun_offset(self, at: datetime, natal_sun_longitude: float) -> float:
        sun = self.engine.position_of(at, CelestialBody.SUN).longitude
        offset = angles.normalize(sun - natal_sun_longitude)
        return offset - 360.0 if offset > 180.0 else offset

    @staticmethod
    def _transit_planet(body: CelestialBody, coords: BodyCoordinates) -> TransitPlanet:
        longitude = angles.normalize(coords.longitude)
        nakshatra, _ = angles.constellation_of(longitude)
        return TransitPlanet(
            body=body,
            longitude=longitude,
            sign=angles.sign_of(longitude),
            degree=round(angles.degree_in_sign(longitude), 2),
            nakshatra=nakshatra,
            retrograde=coords.speed_longitude < 0,
        )

    @staticmethod
    def _as_utc(instant: datetime) -> datetime:
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc)
