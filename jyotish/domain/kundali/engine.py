import logging
from dataclasses import dataclass
from datetime import date, time, datetime, timezone as dt_timezone
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from jyotish.config import Settings, settings as default_settings
from jyotish.domain.kundali import angles
from jyotish.domain.kundali.constants import (
    BODY_ORDER,
    CelestialBody,
    OBSERVED_BODIES,
)
from jyotish.domain.kundali.errors import (
    DerivationFailure,
    InvalidBirthDataError,
    OracleFailure,
    UnsupportedAyanamsaError,
)
from jyotish.domain.kundali.schemas import (
    Ascendant,
    HouseRecord,
    KundaliChart,
    Placement,
)
from jyotish.ephemeris.oracle import (
    BodyCoordinates,
    CalculationFlag,
    CoordinateSystem,
    EphemerisOracle,
    HouseCusps,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BirthInput:
    """
    Immutable birth input used for kundali calculation.
    """
    birth_date: date
    birth_time: time
    latitude: float
    longitude: float
    timezone: str
    ayanamsa: Optional[str] = None

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidBirthDataError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidBirthDataError(f"Longitude out of range: {self.longitude}")

    def to_utc(self) -> datetime:
        """
        Convert local birth date & time into an aware UTC datetime.

        An unknown timezone falls back to UTC with a warning.
        """
        local_dt = datetime.combine(self.birth_date, self.birth_time)

        try:
            local_tz = ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            logger.warning(f"Timezone '{self.timezone}' not found or invalid ({e}). Defaulting to UTC.")
            return local_dt.replace(tzinfo=dt_timezone.utc)

        return local_dt.replace(tzinfo=local_tz).astimezone(dt_timezone.utc)


class KundaliEngine:
    """
    Orchestrates kundali calculation.

    This class:
    - Accepts birth inputs
    - Queries the ephemeris oracle (houses once, each observed body once)
    - Derives Ketu from Rahu
    - Returns domain KundaliChart

    There is no partial success: the first failure aborts the chart.
    """

    def __init__(
        self,
        oracle: EphemerisOracle,
        settings: Optional[Settings] = None,
    ):
        self.oracle = oracle
        self.settings = settings or default_settings
        self.coordinate_system = CoordinateSystem(self.settings.COORDINATE_SYSTEM.lower())
        self.house_system = self.settings.HOUSE_SYSTEM
        self.flags = (CalculationFlag.SPEED,)

    def generate(self, birth: BirthInput) -> KundaliChart:
        """
        Generate the core D1 kundali chart.
        """
        instant = birth.to_utc()
        return self.generate_at(instant, birth.latitude, birth.longitude, birth.ayanamsa)

    def generate_at(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
        ayanamsa: Optional[str] = None,
    ) -> KundaliChart:
        """
        Generate a D1 chart for a UTC instant and observer location.

        `ayanamsa`, when given, must name the oracle's sidereal mode.
        """
        ayanamsa_name = self._resolve_ayanamsa(ayanamsa)
        logger.info(f"Generating chart for {instant.isoformat()} at ({latitude}, {longitude})")

        # ─────────────────────────────────────────────
        # Step 1: House cusps & ascendant
        # ─────────────────────────────────────────────

        cusps = self.oracle.houses(
            instant,
            latitude,
            longitude,
            self.house_system,
            self.coordinate_system,
        )

        # ─────────────────────────────────────────────
        # Step 2: Raw body coordinates (Ketu after Rahu)
        # ─────────────────────────────────────────────

        coordinates: Dict[CelestialBody, BodyCoordinates] = {}
        for body in OBSERVED_BODIES:
            coordinates[body] = self._fetch(instant, body)
        coordinates[CelestialBody.KETU] = angles.derive_descending_node(
            coordinates[CelestialBody.RAHU]
        )

        # ─────────────────────────────────────────────
        # Step 3: Placements
        # ─────────────────────────────────────────────

        planets = {
            body: self.build_placement(body, coordinates[body], cusps)
            for body in BODY_ORDER
        }

        ayanamsa_value = 0.0
        if self.coordinate_system == CoordinateSystem.SIDEREAL:
            ayanamsa_value = self.oracle.ayanamsa(instant)

        # ─────────────────────────────────────────────
        # Step 4: Assemble Kundali Chart
        # ─────────────────────────────────────────────

        return KundaliChart(
            ascendant=self.build_ascendant(cusps.ascendant),
            houses=self.build_houses(cusps, planets),
            planets=planets,
            ayanamsa=ayanamsa_name,
            ayanamsa_value=round(ayanamsa_value, 6),
            coordinate_system=self.coordinate_system.value,
            house_system=self.house_system,
        )

    def position_of(self, instant: datetime, body: CelestialBody) -> BodyCoordinates:
        """
        Resolve a single body.

        Ketu is derived from Rahu; a Rahu failure surfaces as
        DerivationFailure carrying Rahu's code and message.
        """
        if body is not CelestialBody.KETU:
            return self._fetch(instant, body)

        try:
            rahu = self._fetch(instant, CelestialBody.RAHU)
        except OracleFailure as e:
            raise DerivationFailure(e.code, e.message, source=CelestialBody.RAHU) from e
        return angles.derive_descending_node(rahu)

    # ─────────────────────────────────────────────
    # Builders
    # ─────────────────────────────────────────────

    @staticmethod
    def build_placement(
        body: CelestialBody,
        coords: BodyCoordinates,
        cusps: HouseCusps,
    ) -> Placement:
        longitude = angles.normalize(coords.longitude)
        nakshatra, pada = angles.constellation_of(longitude)

        placement = Placement(
            body=body,
            longitude=longitude,
            latitude=coords.latitude,
            distance=coords.distance,
            speed=coords.speed_longitude,
            speed_latitude=coords.speed_latitude,
            sign=angles.sign_of(longitude),
            degree=angles.degree_in_sign(longitude),
            nakshatra=nakshatra,
            pada=pada,
            nakshatra_lord=angles.constellation_lord(nakshatra),
            house=angles.house_of(longitude, cusps.cusps),
            retrograde=coords.speed_longitude < 0,
        )
        logger.debug(
            f"{body.value}: {placement.sign.value} {placement.degree:.2f}, "
            f"{nakshatra.value} ({pada}), house {placement.house}"
        )
        return placement

    @staticmethod
    def build_ascendant(longitude: float) -> Ascendant:
        nakshatra, pada = angles.constellation_of(longitude)
        return Ascendant(
            longitude=angles.normalize(longitude),
            sign=angles.sign_of(longitude),
            degree=angles.degree_in_sign(longitude),
            nakshatra=nakshatra,
            pada=pada,
        )

    @staticmethod
    def build_houses(
        cusps: HouseCusps,
        planets: Dict[CelestialBody, Placement],
    ) -> List[HouseRecord]:
        houses: List[HouseRecord] = []
        for i, cusp in enumerate(cusps.cusps):
            number = i + 1
            sign = angles.sign_of(cusp)
            houses.append(
                HouseRecord(
                    house=number,
                    cusp=angles.normalize(cusp),
                    sign=sign,
                    degree=angles.degree_in_sign(cusp),
                    lord=angles.sign_lord(sign),
                    occupants=[b for b, p in planets.items() if p.house == number],
                )
            )
        return houses

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _fetch(self, instant: datetime, body: CelestialBody) -> BodyCoordinates:
        return self.oracle.position(instant, body, self.coordinate_system, self.flags)

    def _resolve_ayanamsa(self, requested: Optional[str]) -> str:
        name = self.oracle.ayanamsa_name
        if requested is not None and requested.lower() != name.lower():
            raise UnsupportedAyanamsaError(
                f"Requested ayanamsa '{requested}' but the ephemeris computes with '{name}'"
            )
        return name
