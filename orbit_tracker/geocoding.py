"""
Reverse geocoding interface.

Place names are display-only. Implementations wrap whatever offline
geocoder the front end ships with and raise GeocodeError when a lookup
cannot be answered.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple

from orbit_tracker.errors import TrackerError


class GeocodeError(TrackerError):
    """A reverse geocoding lookup failed."""


class Location(NamedTuple):
    place_name: str
    country_code: str


class ReverseGeocoder(ABC):

    @abstractmethod
    def lookup(self, lat: float, lon: float) -> Location:
        """Nearest named place to (lat, lon)."""
