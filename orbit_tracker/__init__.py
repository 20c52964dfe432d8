"""
Orbit Tracker Package

Orbital state computation and map interaction for a satellite ground-track
viewer. Element sets are fetched and cached from CelesTrak, propagated with
the sgp4 library and converted to WGS-84 geodetic coordinates.

Modules:
    frames: Julian date, GMST, TEME to ECEF and ECEF to geodetic conversions
    propagator: SGP4 adapter producing geodetic state vectors
    trajectory: One-orbit ground track sampling with antimeridian splitting
    spatial: Nearest-object picking in longitude/latitude space
    cache: Element cache manager with stale-data fallback
    store: File, Redis and in-memory element stores
    tracker: Selected sources and the active object collection

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

__version__ = "1.0.0"
