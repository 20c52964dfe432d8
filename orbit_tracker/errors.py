"""
Error taxonomy for the orbit tracker.

Object-level failures (ElementsError, PropagationError) affect a single
tracked object. Cache-level failures (FetchError, ParseError, CacheIOError)
affect a whole source and are absorbed by the cache manager whenever
previously cached data exists.
"""


# SGP4 error code meanings
SGP4_ERROR_CODES = {
    0: "No error",
    1: "Mean eccentricity < 0.0 or > 1.0",
    2: "Mean motion < 0.0",
    3: "Perturbed eccentricity < 0.0 or > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Satellite has decayed",
    6: "Satellite has decayed (low altitude)",
}


class TrackerError(Exception):
    """Base class for every error raised by orbit_tracker."""


class ElementsError(TrackerError):
    """An element set cannot be turned into a propagator."""

    def __init__(self, message, norad_id=None):
        super().__init__(message)
        self.norad_id = norad_id


class PropagationError(TrackerError):
    """Propagation failed for one object at one query time."""

    def __init__(self, message, code=None, norad_id=None):
        super().__init__(message)
        self.code = code
        self.norad_id = norad_id

    @classmethod
    def from_sgp4_code(cls, code, norad_id=None, minutes_since_epoch=None):
        meaning = SGP4_ERROR_CODES.get(code, f"Unknown error code {code}")
        message = f"SGP4 error {code}: {meaning}"
        if minutes_since_epoch is not None:
            message += f" (t={minutes_since_epoch:.1f} min from epoch)"
        return cls(message, code=code, norad_id=norad_id)


class CacheError(TrackerError):
    """Base class for the element cache and network layer."""


class FetchError(CacheError):
    """Transport failure or non-success HTTP status."""


class ParseError(CacheError):
    """Payload is not a JSON array of element records."""


class CacheIOError(CacheError):
    """The element store could not be read or written."""
