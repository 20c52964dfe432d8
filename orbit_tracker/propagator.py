"""
SGP4 Propagator Adapter

Wraps the sgp4 library so that one element set becomes one TrackedObject
whose position can be queried at any UTC time.

Construction validates the elements and initializes the Satrec once; a
failure there is an ElementsError and the object never enters the active
set. Each predict() call either returns a StateVector or raises
PropagationError for that call only. There are no retries or fallbacks
here; callers decide whether to skip the object for the current tick.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Tuple

import numpy as np
from sgp4.api import WGS72, Satrec

from config import MINUTES_PER_DAY, SECONDS_PER_DAY
from logging_config import get_logger
from orbit_tracker.elements import OrbitalElementSet
from orbit_tracker.errors import ElementsError, PropagationError
from orbit_tracker.frames import (
    apply_range_policy,
    ecef_to_geodetic,
    gmst_radians,
    julian_date,
    teme_to_ecef,
)

logger = get_logger(__name__)

# SGP4 epochs are counted in days from 1949 December 31 00:00 UT
SGP4_EPOCH_ORIGIN = datetime(1949, 12, 31, tzinfo=timezone.utc)

# Converts rev/day and its derivatives to rad/min
XPDOTP = MINUTES_PER_DAY / (2.0 * math.pi)


@dataclass(frozen=True)
class StateVector:
    """Geodetic position [lon deg, lat deg, alt km] and TEME velocity (km/s)."""

    position: Tuple[float, float, float]
    velocity: Tuple[float, float, float]

    @property
    def longitude(self) -> float:
        return self.position[0]

    @property
    def latitude(self) -> float:
        return self.position[1]

    @property
    def altitude(self) -> float:
        return self.position[2]

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


class TrackedObject:
    """
    An element set together with its initialized SGP4 propagator.

    Elements are immutable and predict() is a pure function of the query
    time, so one instance may be shared between threads.
    """

    def __init__(self, elements: OrbitalElementSet, coordinate_policy: str = "clamp"):
        """
        Args:
            elements: Validated element set
            coordinate_policy: Range policy for output coordinates
                ("clamp", "error" or "assert")

        Raises:
            ElementsError: elements are non-physical or rejected by sgp4init
        """
        self.elements = elements
        self.coordinate_policy = coordinate_policy
        self.satrec = self._build_satrec(elements)

    @staticmethod
    def _build_satrec(elements: OrbitalElementSet) -> Satrec:
        norad_id = elements.norad_id

        if not elements.mean_motion > 0.0:
            raise ElementsError(
                f"Mean motion must be positive, got {elements.mean_motion} rev/day",
                norad_id=norad_id,
            )
        if not 0.0 <= elements.eccentricity < 1.0:
            raise ElementsError(
                f"Eccentricity must be in [0, 1), got {elements.eccentricity}",
                norad_id=norad_id,
            )

        epoch_days = (elements.epoch - SGP4_EPOCH_ORIGIN).total_seconds() / SECONDS_PER_DAY

        satrec = Satrec()
        try:
            satrec.sgp4init(
                WGS72,
                'i',
                norad_id,
                epoch_days,
                elements.drag_term,
                elements.mean_motion_dot / (XPDOTP * MINUTES_PER_DAY),
                elements.mean_motion_ddot / (XPDOTP * MINUTES_PER_DAY * MINUTES_PER_DAY),
                elements.eccentricity,
                math.radians(elements.argument_of_perigee),
                math.radians(elements.inclination),
                math.radians(elements.mean_anomaly),
                elements.mean_motion / XPDOTP,
                math.radians(elements.right_ascension),
            )
        except (ValueError, ZeroDivisionError) as e:
            raise ElementsError(f"sgp4init rejected elements: {e}", norad_id=norad_id) from e

        if satrec.error != 0:
            raise ElementsError(
                f"sgp4init failed with error code {satrec.error}",
                norad_id=norad_id,
            )

        return satrec

    @property
    def name(self) -> str:
        return self.elements.name

    @property
    def norad_id(self) -> int:
        return self.elements.norad_id

    @property
    def epoch(self) -> datetime:
        return self.elements.epoch

    @property
    def orbital_period(self) -> timedelta:
        """Time for one revolution, from the mean motion."""
        return timedelta(seconds=SECONDS_PER_DAY / self.elements.mean_motion)

    def minutes_since_epoch(self, time: datetime) -> float:
        """Elapsed minutes from the element epoch; negative before it. Naive times are UTC."""
        if time.tzinfo is None:
            time = time.replace(tzinfo=timezone.utc)
        return (time - self.epoch).total_seconds() / 60.0

    def predict_teme(self, minutes_since_epoch: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Raw SGP4 state in the TEME frame.

        Returns:
            Tuple of (position km, velocity km/s)

        Raises:
            PropagationError: SGP4 reported an error for this time
        """
        satrec = self.satrec
        error, r_teme, v_teme = satrec.sgp4(
            satrec.jdsatepoch,
            satrec.jdsatepochF + minutes_since_epoch / MINUTES_PER_DAY,
        )

        if error != 0:
            raise PropagationError.from_sgp4_code(
                error, norad_id=self.norad_id, minutes_since_epoch=minutes_since_epoch
            )

        return np.array(r_teme), np.array(v_teme)

    def predict(self, time: datetime) -> StateVector:
        """
        Propagate to a UTC time and convert to geodetic coordinates.

        Args:
            time: UTC query time; naive values are taken as UTC

        Raises:
            PropagationError: SGP4 failed, or coordinates violate the
                "error" range policy
        """
        r_teme, v_teme = self.predict_teme(self.minutes_since_epoch(time))

        gmst = gmst_radians(julian_date(time))
        lat, lon, alt = ecef_to_geodetic(teme_to_ecef(r_teme, gmst))
        lon, lat = apply_range_policy(lon, lat, self.coordinate_policy)

        return StateVector(
            position=(lon, lat, alt),
            velocity=tuple(float(v) for v in v_teme),
        )

    def __repr__(self):
        return f"TrackedObject({self.name!r}, norad_id={self.norad_id})"
