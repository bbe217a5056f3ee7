import logging
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional, Sequence

import swisseph as swe

from jyotish.config import Settings, settings as default_settings
from jyotish.domain.kundali.constants import CelestialBody
from jyotish.domain.kundali.errors import OracleFailure, UnsupportedAyanamsaError
from jyotish.ephemeris.oracle import (
    BodyCoordinates,
    CalculationFlag,
    CoordinateSystem,
    EphemerisOracle,
    HouseCusps,
)

logger = logging.getLogger(__name__)


AYANAMSA_MODES: Dict[str, int] = {
    "lahiri": swe.SIDM_LAHIRI,
    "fagan_bradley": swe.SIDM_FAGAN_BRADLEY,
    "raman": swe.SIDM_RAMAN,
    "krishnamurti": swe.SIDM_KRISHNAMURTI,
}

BODY_IDS: Dict[CelestialBody, int] = {
    CelestialBody.SUN: swe.SUN,
    CelestialBody.MOON: swe.MOON,
    CelestialBody.MARS: swe.MARS,
    CelestialBody.MERCURY: swe.MERCURY,
    CelestialBody.JUPITER: swe.JUPITER,
    CelestialBody.VENUS: swe.VENUS,
    CelestialBody.SATURN: swe.SATURN,
    CelestialBody.RAHU: swe.MEAN_NODE,  # Mean Node is standard in Vedic
}

FLAG_BITS: Dict[CalculationFlag, int] = {
    CalculationFlag.SPEED: swe.FLG_SPEED,
    CalculationFlag.TOPOCENTRIC: swe.FLG_TOPOCTR,
    CalculationFlag.TRUE_POSITION: swe.FLG_TRUEPOS,
}


class EphemerisContext:
    """
    One-time initialization of the Swiss Ephemeris data location.

    Constructed once by the application and handed to every
    SwissEphemerisOracle. `initialize` runs at most once; later
    calls are no-ops.
    """

    def __init__(self, ephemeris_path: Optional[str] = None):
        self.ephemeris_path = ephemeris_path
        self._initialized = False
        self._lock = Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> bool:
        """
        Returns True only for the call that performed initialization.
        """
        if self._initialized:
            return False
        with self._lock:
            if self._initialized:
                return False
            if self.ephemeris_path:
                swe.set_ephe_path(self.ephemeris_path)
                logger.info(f"Ephemeris path set to: {self.ephemeris_path}")
            else:
                logger.info("No ephemeris path configured, using built-in Moshier ephemeris")
            self._initialized = True
            return True


class SwissEphemerisOracle(EphemerisOracle):
    """
    EphemerisOracle backed by pyswisseph.

    This adapter:
    - Converts instants to Julian Days (UT)
    - Selects the sidereal mode from the configured ayanamsa
    - Maps Swiss Ephemeris errors to OracleFailure
    """

    def __init__(self, context: EphemerisContext, ayanamsa: str = "Lahiri"):
        mode = AYANAMSA_MODES.get(ayanamsa.lower())
        if mode is None:
            raise UnsupportedAyanamsaError(
                f"Unsupported ayanamsa '{ayanamsa}'. "
                f"Supported: {', '.join(sorted(AYANAMSA_MODES))}"
            )
        self.context = context
        self._ayanamsa_name = ayanamsa
        self.sidereal_mode = mode

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SwissEphemerisOracle":
        """
        Oracle for the configured ephemeris path and ayanamsa.
        """
        settings = settings or default_settings
        return cls(EphemerisContext(settings.EPHEMERIS_PATH), ayanamsa=settings.AYANAMSA)

    @property
    def ayanamsa_name(self) -> str:
        return self._ayanamsa_name

    # ─────────────────────────────────────────────
    # EphemerisOracle
    # ─────────────────────────────────────────────

    def position(
        self,
        instant: datetime,
        body: CelestialBody,
        coordinate_system: CoordinateSystem,
        flags: Sequence[CalculationFlag] = (CalculationFlag.SPEED,),
    ) -> BodyCoordinates:
        if body not in BODY_IDS:
            raise ValueError(f"{body.value} is derived and cannot be queried from the ephemeris")

        self.context.initialize()
        iflag = self._coordinate_flags(coordinate_system)
        for flag in flags:
            iflag |= FLAG_BITS[flag]

        julian_day = self._julian_day(instant)
        try:
            result, retflag = swe.calc_ut(julian_day, BODY_IDS[body], iflag)
        except swe.Error as e:
            logger.error(f"Ephemeris failed for {body.value} at JD {julian_day}: {e}")
            raise OracleFailure(-1, str(e)) from e

        if retflag < 0:
            raise OracleFailure(retflag, f"Ephemeris returned status {retflag} for {body.value}")

        return BodyCoordinates(
            longitude=result[0],
            latitude=result[1],
            distance=result[2],
            speed_longitude=result[3],
            speed_latitude=result[4],
            speed_distance=result[5],
        )

    def houses(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
        house_system: str,
        coordinate_system: CoordinateSystem,
    ) -> HouseCusps:
        self.context.initialize()
        iflag = self._coordinate_flags(coordinate_system)
        julian_day = self._julian_day(instant)

        try:
            cusps, ascmc = swe.houses_ex(
                julian_day, latitude, longitude, house_system.encode("ascii"), iflag
            )
        except swe.Error as e:
            logger.error(f"House calculation failed at JD {julian_day}: {e}")
            raise OracleFailure(-1, str(e)) from e

        return HouseCusps(
            cusps=tuple(cusps[:12]),
            ascendant=ascmc[0],
            midheaven=ascmc[1],
        )

    def ayanamsa(self, instant: datetime) -> float:
        self.context.initialize()
        swe.set_sid_mode(self.sidereal_mode, 0, 0)
        return swe.get_ayanamsa_ut(self._julian_day(instant))

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _coordinate_flags(self, coordinate_system: CoordinateSystem) -> int:
        if coordinate_system == CoordinateSystem.SIDEREAL:
            swe.set_sid_mode(self.sidereal_mode, 0, 0)
            return swe.FLG_SIDEREAL
        return 0

    def _julian_day(self, instant: datetime) -> float:
        """
        Julian Day (UT) for an instant. Naive datetimes are taken as UTC.
        """
        if instant.tzinfo is not None:
            instant = instant.astimezone(timezone.utc)
        hour_decimal = (
            instant.hour
            + instant.minute / 60.0
            + (instant.second + instant.microsecond / 1e6) / 3600.0
        )
        return swe.julday(instant.year, instant.month, instant.day, hour_decimal)
