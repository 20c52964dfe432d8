"""
Satellite Tracker

Owns the selected sources and the active collection of tracked objects.

Readers (rendering, picking, ground tracks) take the current tuple of
objects and work on it without locking. refresh() builds a complete new
tuple and publishes it with one assignment, so a reader never sees a
half-rebuilt collection.
"""

import threading
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from config import TrackerConfig
from logging_config import get_logger
from orbit_tracker.cache import ElementCacheManager, ElementLookup, utc_now
from orbit_tracker.catalog import SOURCES, Source
from orbit_tracker.celestrak import CelestrakClient
from orbit_tracker.errors import ElementsError, PropagationError
from orbit_tracker.propagator import StateVector, TrackedObject
from orbit_tracker.spatial import nearest
from orbit_tracker.store import FileElementStore, RedisElementStore
from orbit_tracker.trajectory import TrajectorySegment, ground_track

logger = get_logger(__name__)


class SatelliteTracker:
    """Selected sources and the objects derived from their element sets."""

    def __init__(self, cache_manager: ElementCacheManager, coordinate_policy: str = "clamp"):
        self.cache_manager = cache_manager
        self.coordinate_policy = coordinate_policy

        self.objects: Tuple[TrackedObject, ...] = ()
        self.unavailable: frozenset = frozenset()
        self.last_lookups: Dict[str, ElementLookup] = {}

        self._selected: List[Source] = []
        self._refresh_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[TrackerConfig] = None) -> "SatelliteTracker":
        config = config or TrackerConfig()

        if config.redis_url:
            store = RedisElementStore.from_url(config.redis_url)
        else:
            store = FileElementStore(config.cache_dir)

        manager = ElementCacheManager(
            store,
            CelestrakClient(config.celestrak_gp_url, timeout=config.http_timeout),
            max_age=timedelta(seconds=config.cache_max_age),
        )
        return cls(manager, coordinate_policy=config.coordinate_policy)

    # Source selection

    @property
    def selected_sources(self) -> Tuple[Source, ...]:
        """Selected sources in catalog order."""
        return tuple(s for s in SOURCES if s in self._selected) + tuple(
            s for s in self._selected if s not in SOURCES
        )

    def select(self, source: Source) -> None:
        if source not in self._selected:
            self._selected.append(source)

    def deselect(self, source: Source) -> None:
        if source in self._selected:
            self._selected.remove(source)

    def toggle(self, source: Source) -> bool:
        """Flip selection of source; returns the new state."""
        if source in self._selected:
            self.deselect(source)
            return False
        self.select(source)
        return True

    # Refresh

    def build_objects(self, lookups: Dict[str, ElementLookup]) -> Tuple[TrackedObject, ...]:
        """Tracked objects for the given lookups in selection order; bad elements are dropped."""
        objects = []
        for source in self.selected_sources:
            lookup = lookups.get(source.key)
            if lookup is None or not lookup.available:
                continue
            for elements in lookup.elements:
                try:
                    objects.append(TrackedObject(elements, self.coordinate_policy))
                except ElementsError as e:
                    logger.warning(f"Dropping {elements.name} ({elements.norad_id}): {e}")
        return tuple(objects)

    def refresh(self) -> Tuple[TrackedObject, ...]:
        """
        Refresh every selected source and swap in the rebuilt collection.

        Sources that come back UNAVAILABLE are listed in self.unavailable
        so the front end can mark them as temporarily unselectable.
        """
        with self._refresh_lock:
            lookups = self.cache_manager.refresh_many(self.selected_sources)
            objects = self.build_objects(lookups)

            self.last_lookups = lookups
            self.unavailable = frozenset(
                key for key, lookup in lookups.items() if not lookup.available
            )
            self.objects = objects

        logger.info(
            f"Tracking {len(objects)} objects from {len(lookups)} sources"
            + (f", unavailable: {sorted(self.unavailable)}" if self.unavailable else "")
        )
        return objects

    # Read side

    def current_states(self, now: Optional[datetime] = None) -> List[Optional[StateVector]]:
        """State per object at now; None where propagation failed this tick."""
        now = now or utc_now()
        states: List[Optional[StateVector]] = []
        for obj in self.objects:
            try:
                states.append(obj.predict(now))
            except PropagationError as e:
                logger.debug(f"Skipping {obj.name} this tick: {e}")
                states.append(None)
        return states

    def nearest(self, lon: float, lat: float,
                now: Optional[datetime] = None) -> Optional[int]:
        return nearest(self.current_states(now), lon, lat)

    def trajectory(self, index: int, now: Optional[datetime] = None) -> List[TrajectorySegment]:
        return ground_track(self.objects[index], now or utc_now())
