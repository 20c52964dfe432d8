"""
Ground Track Sampling

Builds the one-orbit ground track drawn for the selected object. The
propagator is sampled once a minute, starting one minute after the
reference time, for a full orbital period. Consecutive samples become
two-point segments. Pairs that cross the antimeridian are split at the
+/-180 degree edge, and pairs whose latitude jumps by 90 degrees or more
within a minute are treated as a propagation anomaly and dropped.

The track is recomputed on every call since it moves with the clock.
"""

from datetime import datetime, timedelta
from typing import List, NamedTuple, Optional, Sequence

from logging_config import get_logger
from orbit_tracker.errors import PropagationError
from orbit_tracker.propagator import TrackedObject

logger = get_logger(__name__)

ANTIMERIDIAN_GAP_DEG = 180.0
LATITUDE_ANOMALY_DEG = 90.0


class GroundPoint(NamedTuple):
    longitude: float
    latitude: float


class TrajectorySegment(NamedTuple):
    start: GroundPoint
    end: GroundPoint

    @property
    def longitude_span(self) -> float:
        return abs(self.end.longitude - self.start.longitude)


def sample_minutes(obj: TrackedObject) -> range:
    """Integer minute offsets 1 .. period-1; minute 0 is drawn by the caller."""
    period_minutes = int(obj.orbital_period.total_seconds() // 60)
    return range(1, period_minutes)


def sample_ground_track(obj: TrackedObject, t0: datetime) -> List[Optional[GroundPoint]]:
    """
    Sub-satellite points at each whole minute after t0.

    A sample whose propagation fails is kept as None so the gap is not
    bridged by a segment.
    """
    points: List[Optional[GroundPoint]] = []
    for minutes in sample_minutes(obj):
        try:
            state = obj.predict(t0 + timedelta(minutes=minutes))
        except PropagationError as e:
            logger.debug(f"Ground track sample skipped for {obj.norad_id} at +{minutes} min: {e}")
            points.append(None)
            continue
        points.append(GroundPoint(state.longitude, state.latitude))
    return points


def split_at_antimeridian(p1: GroundPoint, p2: GroundPoint) -> List[TrajectorySegment]:
    """
    Split a crossing pair into two segments meeting the +/-180 edge.

    The crossing latitude is interpolated along the short way round.
    """
    edge = 180.0 if p1.longitude > 0.0 else -180.0
    # Unwrap p2 onto p1's side of the antimeridian
    lon2 = p2.longitude + 360.0 if edge > 0.0 else p2.longitude - 360.0

    delta = lon2 - p1.longitude
    if delta == 0.0:
        crossing_lat = p1.latitude
    else:
        fraction = (edge - p1.longitude) / delta
        crossing_lat = p1.latitude + fraction * (p2.latitude - p1.latitude)

    return [
        TrajectorySegment(p1, GroundPoint(edge, crossing_lat)),
        TrajectorySegment(GroundPoint(-edge, crossing_lat), p2),
    ]


def build_segments(points: Sequence[Optional[GroundPoint]]) -> List[TrajectorySegment]:
    """Turn ordered samples into drawable segments."""
    segments: List[TrajectorySegment] = []

    for p1, p2 in zip(points, points[1:]):
        if p1 is None or p2 is None:
            continue

        if abs(p1.latitude - p2.latitude) >= LATITUDE_ANOMALY_DEG:
            logger.debug(f"Dropping anomalous ground track segment {p1} -> {p2}")
            continue

        if abs(p1.longitude - p2.longitude) >= ANTIMERIDIAN_GAP_DEG:
            segments.extend(split_at_antimeridian(p1, p2))
            continue

        segments.append(TrajectorySegment(p1, p2))

    return segments


def ground_track(obj: TrackedObject, t0: datetime) -> List[TrajectorySegment]:
    """Segments for one orbital period of obj starting just after t0."""
    return build_segments(sample_ground_track(obj, t0))
