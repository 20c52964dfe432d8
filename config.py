"""
Orbit Tracker Configuration and Constants

This module contains the physical constants and runtime settings used
throughout the project.

Constants:
    WGS-84 ellipsoid parameters for geodetic conversion of propagated
    positions, and the GMST polynomial coefficients referenced to J2000.

Runtime settings:
    TrackerConfig reads its values from the environment so the same code can
    point at a different element catalog, cache directory or store without
    edits.

    Element data freshness:
    - Cached element sets are reused for up to 2 hours
    - Older entries trigger a refetch; on failure the old data is kept

    Sources for element data:
    - CelesTrak.org (public access, JSON OMM format)

References:
    Meeus, J. (1998). Astronomical Algorithms (2nd ed.), chapter 12.
    NIMA TR8350.2 (2000). Department of Defense World Geodetic System 1984.
"""

import os
from typing import Optional

# WGS-84 ellipsoid
WGS84_SEMI_MAJOR_AXIS_KM: float = 6378.137  # Equatorial radius (km)
WGS84_FLATTENING: float = 1.0 / 298.257223563

# GMST polynomial (degrees), Meeus eq. 12.4
J2000_JULIAN_DATE: float = 2451545.0
DAYS_PER_JULIAN_CENTURY: float = 36525.0
GMST_MEAN_DEG: float = 280.46061837
GMST_ADVANCE_DEG_PER_DAY: float = 360.98564736629
GMST_T2_COEFF: float = 0.000387933
GMST_T3_COEFF: float = -1.0 / 38710000.0

MINUTES_PER_DAY: float = 1440.0
SECONDS_PER_DAY: float = 86400.0

# Upstream element catalog
CELESTRAK_GP_URL: str = "https://celestrak.org/NORAD/elements/gp.php"
HTTP_TIMEOUT_SECONDS: float = 30.0

# Cache freshness
ELEMENT_CACHE_MAX_AGE_SECONDS: float = 2 * 60 * 60

COORDINATE_POLICIES = ("clamp", "error", "assert")


class TrackerConfig:
    """Runtime settings resolved from the environment."""

    def __init__(self, environ: Optional[dict] = None):
        env = os.environ if environ is None else environ

        self.celestrak_gp_url = env.get("CELESTRAK_GP_URL", CELESTRAK_GP_URL)
        self.cache_dir = env.get("ELEMENT_CACHE_DIR", "cache")
        self.cache_max_age = float(
            env.get("ELEMENT_CACHE_MAX_AGE", ELEMENT_CACHE_MAX_AGE_SECONDS)
        )
        self.http_timeout = float(env.get("HTTP_TIMEOUT", HTTP_TIMEOUT_SECONDS))
        self.redis_url = env.get("REDIS_URL") or None
        self.log_level = env.get("LOG_LEVEL", "INFO").upper()

        policy = env.get("COORDINATE_POLICY", "clamp").lower()
        if policy not in COORDINATE_POLICIES:
            raise ValueError(
                f"COORDINATE_POLICY must be one of {COORDINATE_POLICIES}, got {policy!r}"
            )
        self.coordinate_policy = policy

    def __repr__(self):
        return (
            f"TrackerConfig(cache_dir={self.cache_dir!r}, "
            f"cache_max_age={self.cache_max_age}, "
            f"redis_url={self.redis_url!r}, "
            f"coordinate_policy={self.coordinate_policy!r})"
        )
