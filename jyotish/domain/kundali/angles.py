"""
Placement primitives.

Pure functions that map an ecliptic longitude to its zodiac sign,
nakshatra and pada, and resolve house membership from cusps.
Every function accepts any real longitude (negative or >= 360)
and normalizes it first.
"""

import math
from typing import Sequence, Tuple

from jyotish.domain.kundali.constants import (
    CelestialBody,
    Nakshatra,
    ZodiacSign,
    NAKSHATRAS,
    NAKSHATRA_LORDS,
    NAKSHATRA_SPAN,
    PADA_SPAN,
    SIGNS,
    SIGN_LORDS,
    SIGN_SPAN,
)
from jyotish.ephemeris.oracle import BodyCoordinates

# Float noise tolerated at category boundaries (degrees)
BOUNDARY_EPSILON = 1e-6

# Decimal places kept before segmenting, so L and L + 360k agree
SEGMENT_PRECISION = 9


# ─────────────────────────────────────────────
# Normalization
# ─────────────────────────────────────────────

def normalize(longitude: float) -> float:
    """
    Normalize a longitude into [0, 360).
    """
    value = ((longitude % 360.0) + 360.0) % 360.0
    # -1e-20 % 360.0 == 360.0 in floating point
    if value >= 360.0:
        return 0.0
    return value


def _segment(longitude: float, span: float) -> Tuple[int, float]:
    """
    Index of the `span`-wide segment containing `longitude`,
    plus the offset into that segment.
    """
    lon = round(normalize(longitude), SEGMENT_PRECISION)
    if lon >= 360.0:
        lon = 0.0
    index = math.floor((lon + BOUNDARY_EPSILON) / span)
    offset = max(lon - index * span, 0.0)
    return index, offset


# ─────────────────────────────────────────────
# Signs
# ─────────────────────────────────────────────

def sign_of(longitude: float) -> ZodiacSign:
    """
    Zodiac sign for a longitude.

    Exact multiples of 30 belong to the next sign (30.0 → Taurus).
    """
    index, _ = _segment(longitude, SIGN_SPAN)
    return SIGNS[index % 12]


def degree_in_sign(longitude: float) -> float:
    _, offset = _segment(longitude, SIGN_SPAN)
    return min(offset, SIGN_SPAN)


def sign_lord(sign: ZodiacSign) -> CelestialBody:
    return SIGN_LORDS[sign]


# ─────────────────────────────────────────────
# Nakshatras
# ─────────────────────────────────────────────

def constellation_of(longitude: float) -> Tuple[Nakshatra, int]:
    """
    Calculate nakshatra and pada from longitude.

    Returns:
        (nakshatra, pada) with pada in 1..4
    """
    index, offset = _segment(longitude, NAKSHATRA_SPAN)
    pada = math.floor((offset + BOUNDARY_EPSILON) / PADA_SPAN) + 1
    return NAKSHATRAS[index % 27], min(max(pada, 1), 4)


def fraction_traversed(longitude: float) -> float:
    """
    Portion of the current nakshatra already traversed, in [0, 1).
    """
    _, offset = _segment(longitude, NAKSHATRA_SPAN)
    return min(offset / NAKSHATRA_SPAN, math.nextafter(1.0, 0.0))


def constellation_lord(nakshatra: Nakshatra) -> CelestialBody:
    return NAKSHATRA_LORDS[nakshatra.index % 9]


# ─────────────────────────────────────────────
# Derived bodies
# ─────────────────────────────────────────────

def derive_descending_node(ascending: BodyCoordinates) -> BodyCoordinates:
    """
    Ketu sits exactly opposite Rahu.

    Longitude is shifted by 180°, latitude and its speed are negated,
    distance and the remaining speeds are carried over.
    """
    return BodyCoordinates(
        longitude=normalize(ascending.longitude + 180.0),
        latitude=-ascending.latitude,
        distance=ascending.distance,
        speed_longitude=ascending.speed_longitude,
        speed_latitude=-ascending.speed_latitude,
        speed_distance=ascending.speed_distance,
    )


# ─────────────────────────────────────────────
# Houses & separations
# ─────────────────────────────────────────────

def house_of(longitude: float, cusps: Sequence[float]) -> int:
    """
    House (1–12) whose cusp interval contains the longitude.

    Intervals run from one cusp to the next and may wrap past 0°.
    """
    lon = normalize(longitude)
    for i, start in enumerate(cusps):
        end = cusps[(i + 1) % len(cusps)]
        width = normalize(end - start)
        if normalize(lon - start) < width:
            return i + 1
    # Degenerate cusps (all equal)
    return 1


def angular_separation(first: float, second: float) -> float:
    """
    Shortest arc between two longitudes, in [0, 180].
    """
    diff = normalize(first - second)
    return min(diff, 360.0 - diff)


def house_offset(from_house: int, to_house: int) -> int:
    """
    Inclusive forward count from one house to another (same house → 1).
    """
    return ((to_house - from_house) % 12) + 1
