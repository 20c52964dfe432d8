"""
Time and Reference Frame Conversions

Pure numeric functions that take an SGP4 TEME position to geodetic
coordinates:

    UTC datetime -> Julian date -> GMST -> TEME to ECEF -> WGS-84 geodetic

None of the conversions fail. Range checks on the resulting latitude and
longitude are applied separately by apply_range_policy so the maths stays
total.

References:
    Meeus, J. (1998). Astronomical Algorithms (2nd ed.), chapters 7 and 12.
    Bowring, B. R. (1976). Transformation from spatial to geographical
    coordinates. Survey Review, 23(181).
"""

import math
from datetime import datetime, timezone
from typing import Tuple

import numpy as np

from config import (
    DAYS_PER_JULIAN_CENTURY,
    GMST_ADVANCE_DEG_PER_DAY,
    GMST_MEAN_DEG,
    GMST_T2_COEFF,
    GMST_T3_COEFF,
    J2000_JULIAN_DATE,
    WGS84_FLATTENING,
    WGS84_SEMI_MAJOR_AXIS_KM,
)
from logging_config import get_logger
from orbit_tracker.errors import PropagationError

logger = get_logger(__name__)

TWO_PI = 2.0 * math.pi

# Derived WGS-84 quantities
_A = WGS84_SEMI_MAJOR_AXIS_KM
_B = _A * (1.0 - WGS84_FLATTENING)
_E2 = 2.0 * WGS84_FLATTENING - WGS84_FLATTENING * WGS84_FLATTENING
_EP2 = _E2 / (1.0 - _E2)


def julian_date(utc: datetime) -> float:
    """
    Convert a UTC datetime to a Julian date.

    Naive datetimes are taken to be UTC already; aware ones are converted.

    Args:
        utc: Calendar date and time (Gregorian)

    Returns:
        Julian date including the fractional day
    """
    if utc.tzinfo is not None:
        utc = utc.astimezone(timezone.utc)

    year, month, day = utc.year, utc.month, utc.day
    hour = (
        utc.hour
        + utc.minute / 60.0
        + (utc.second + utc.microsecond / 1e6) / 3600.0
    )

    if month <= 2:
        year -= 1
        month += 12

    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + hour / 24.0
        - 1524.5
        + b
    )


def _reduce_degrees(angle: float) -> float:
    # A term that overflowed to +/-inf no longer carries an angle
    if not math.isfinite(angle):
        return 0.0
    return math.fmod(angle, 360.0)


def gmst_radians(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time for a Julian date.

    Uses the cubic polynomial in Julian centuries since J2000. Each term is
    reduced modulo 360 degrees before summing so large offsets from J2000
    keep their precision. Terms too large to represent contribute nothing,
    so any finite jd gives a result in range.

    Args:
        jd: Julian date (UT1, UTC is close enough here)

    Returns:
        GMST in radians, in [0, 2*pi)
    """
    days = jd - J2000_JULIAN_DATE
    t = days / DAYS_PER_JULIAN_CENTURY

    gmst_deg = (
        GMST_MEAN_DEG
        + _reduce_degrees(GMST_ADVANCE_DEG_PER_DAY * days)
        + _reduce_degrees(GMST_T2_COEFF * t * t)
        + _reduce_degrees(GMST_T3_COEFF * t * t * t)
    )

    gmst = math.radians(gmst_deg % 360.0) % TWO_PI
    # float rounding can land exactly on the upper bound
    if gmst >= TWO_PI:
        gmst = 0.0
    return gmst


def teme_to_ecef(position, gmst: float) -> np.ndarray:
    """
    Rotate a TEME position about the z axis into ECEF.

    Args:
        position: [x, y, z] in the TEME frame (km)
        gmst: Greenwich Mean Sidereal Time (rad)

    Returns:
        [x, y, z] in the ECEF frame (km)
    """
    x, y, z = position
    cos_gmst = math.cos(gmst)
    sin_gmst = math.sin(gmst)

    return np.array([
        cos_gmst * x + sin_gmst * y,
        -sin_gmst * x + cos_gmst * y,
        z,
    ])


def ecef_to_geodetic(position) -> Tuple[float, float, float]:
    """
    ECEF to WGS-84 geodetic conversion using Bowring's method.

    Bowring's closed form is iterated on the parametric latitude until it
    stops moving, which takes two or three passes for anything between LEO
    and GEO.

    Args:
        position: [x, y, z] in the ECEF frame (km)

    Returns:
        Tuple of (latitude_deg, longitude_deg, altitude_km)
    """
    x, y, z = position

    lon = math.atan2(y, x)
    p = math.hypot(x, y)

    # On the polar axis longitude is arbitrary
    if p < 1e-10:
        lat = math.copysign(math.pi / 2.0, z)
        return math.degrees(lat), math.degrees(lon), abs(z) - _B

    beta = math.atan2(z, p * (1.0 - WGS84_FLATTENING))
    lat = beta
    for _ in range(10):
        sin_beta = math.sin(beta)
        cos_beta = math.cos(beta)
        lat = math.atan2(
            z + _EP2 * _B * sin_beta ** 3,
            p - _E2 * _A * cos_beta ** 3,
        )
        new_beta = math.atan2((1.0 - WGS84_FLATTENING) * math.sin(lat), math.cos(lat))
        if abs(new_beta - beta) < 1e-15:
            break
        beta = new_beta

    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)
    # Well conditioned at every latitude, unlike p / cos(lat) - N
    alt = p * cos_lat + z * sin_lat - _A * math.sqrt(1.0 - _E2 * sin_lat * sin_lat)

    return math.degrees(lat), math.degrees(lon), alt


def geodetic_to_ecef(lat_deg: float, lon_deg: float, alt_km: float) -> np.ndarray:
    """
    WGS-84 geodetic coordinates to an ECEF position (km).

    Inverse of ecef_to_geodetic.
    """
    lat = math.radians(lat_deg)
    lon = math.radians(lon_deg)
    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)
    n = _A / math.sqrt(1.0 - _E2 * sin_lat * sin_lat)

    return np.array([
        (n + alt_km) * cos_lat * math.cos(lon),
        (n + alt_km) * cos_lat * math.sin(lon),
        (n * (1.0 - _E2) + alt_km) * sin_lat,
    ])


def apply_range_policy(lon: float, lat: float, policy: str = "clamp") -> Tuple[float, float]:
    """
    Enforce longitude in [-180, 180] and latitude in [-90, 90].

    Policies:
        clamp  - clamp into range (NaN raises PropagationError)
        error  - raise PropagationError
        assert - assert, matching a debug-build check

    Returns:
        Tuple of (longitude_deg, latitude_deg)
    """
    in_range = -180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0

    if policy == "clamp":
        if math.isnan(lon) or math.isnan(lat):
            raise PropagationError(f"Coordinates are not a number: lon={lon}, lat={lat}")
        if not in_range:
            logger.debug(f"Clamping out-of-range coordinates lon={lon} lat={lat}")
        return min(max(lon, -180.0), 180.0), min(max(lat, -90.0), 90.0)

    if policy == "error":
        if not in_range:
            raise PropagationError(f"Coordinates out of range: lon={lon}, lat={lat}")
        return lon, lat

    if policy == "assert":
        assert -180.0 <= lon <= 180.0, "longitude out of range"
        assert -90.0 <= lat <= 90.0, "latitude out of range"
        return lon, lat

    raise ValueError(f"Unknown coordinate policy: {policy!r}")
