"""
Nearest-object lookup in longitude/latitude space.

Used for both click-to-select and pointer hover. The caller owns the
selection and hover state; this module only answers "which object is
closest to this point". Distances are planar in degrees, which is good
enough at map scale.
"""

from typing import Optional, Sequence, Tuple

from orbit_tracker.propagator import StateVector


def nearest(states: Sequence[Optional[StateVector]],
            query_lon: float, query_lat: float) -> Optional[int]:
    """
    Index of the state closest to (query_lon, query_lat).

    Entries that are None (propagation failed this tick) are skipped.
    Ties go to the lowest index.

    Returns:
        Index into states, or None if there is nothing to pick
    """
    best_index = None
    best_distance = None

    for index, state in enumerate(states):
        if state is None:
            continue
        dx = state.longitude - query_lon
        dy = state.latitude - query_lat
        distance = dx * dx + dy * dy
        if best_distance is None or distance < best_distance:
            best_index = index
            best_distance = distance

    return best_index


def area_to_lon_lat(x: int, y: int, width: int, height: int) -> Tuple[float, float]:
    """
    Map a cell inside a width x height map area to (lon, lat).

    Cell (0, 0) is the top-left corner; the +1 places the point at the
    far edge of the cell.
    """
    normalized_x = (x + 1) / width
    normalized_y = (y + 1) / height
    lon = -180.0 + normalized_x * 360.0
    lat = 90.0 - normalized_y * 180.0
    return lon, lat


def lon_lat_to_area(lon: float, lat: float, width: int, height: int) -> Tuple[int, int]:
    """Inverse of area_to_lon_lat, rounded to the nearest cell."""
    x = (lon + 180.0) * width / 360.0 - 1.0
    y = (90.0 - lat) * height / 180.0 - 1.0
    return max(0, round(x)), max(0, round(y))
