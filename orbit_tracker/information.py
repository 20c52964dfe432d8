"""
Object information rows for the details panel.

Turns a tracked object and its current state into ordered (label, value)
pairs. Formatting only; the front end decides how to lay them out.
"""

from typing import List, Optional, Tuple

from logging_config import get_logger
from orbit_tracker.geocoding import GeocodeError, ReverseGeocoder
from orbit_tracker.propagator import StateVector, TrackedObject

logger = get_logger(__name__)


def format_longitude(longitude: float) -> str:
    if longitude >= 0.0:
        return f"{longitude:.5f}°E"
    return f"{abs(longitude):.5f}°W"


def format_latitude(latitude: float) -> str:
    if latitude >= 0.0:
        return f"{latitude:.5f}°N"
    return f"{abs(latitude):.5f}°S"


def format_period(obj: TrackedObject) -> str:
    """Orbital period as "H hr M min S (X.XX min)"."""
    total_seconds = int(obj.orbital_period.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours} hr {minutes} min {seconds} ({total_seconds / 60.0:.2f} min)"


def describe_location(geocoder: Optional[ReverseGeocoder], state: StateVector) -> str:
    """Best-effort "Place, CC" under the object; "Unknown" when unavailable."""
    if geocoder is None:
        return "Unknown"
    try:
        location = geocoder.lookup(state.latitude, state.longitude)
    except GeocodeError as e:
        logger.debug(f"Reverse geocoding failed at {state.latitude}, {state.longitude}: {e}")
        return "Unknown"
    return f"{location.place_name}, {location.country_code}"


def object_information(obj: TrackedObject, state: StateVector,
                       geocoder: Optional[ReverseGeocoder] = None) -> List[Tuple[str, str]]:
    elements = obj.elements
    return [
        ("Name", elements.name),
        ("COSPAR ID", elements.international_designator),
        ("NORAD ID", str(elements.norad_id)),
        ("Longitude", format_longitude(state.longitude)),
        ("Latitude", format_latitude(state.latitude)),
        ("Altitude", f"{state.altitude:.5f} km"),
        ("Speed", f"{state.speed:.2f} km/s"),
        ("Location", describe_location(geocoder, state)),
        ("Epoch", elements.epoch.isoformat()),
        ("Period", format_period(obj)),
        ("Inc", str(elements.inclination)),
        ("R.A.", str(elements.right_ascension)),
        ("Ecc", str(elements.eccentricity)),
        ("M. anomaly", str(elements.mean_anomaly)),
        ("M. motion", str(elements.mean_motion)),
        ("Rev. #", str(elements.revolution_number)),
    ]
