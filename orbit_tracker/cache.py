"""
Element Cache Manager

Decides, per source, whether to serve cached element sets or go to the
network, and how to degrade when the network fails.

    no entry                 -> fetch; success FRESH, failure UNAVAILABLE
    entry younger than 2 h   -> CACHED, no network access
    entry 2 h or older       -> refetch; success FRESH, failure STALE
                                (the old entry is returned untouched)

get() is the side-effect-free read path. refresh() runs the policy above
and is what an external scheduler calls periodically. Sources are
independent, so refresh_many() fans them out over a thread pool.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple

from config import ELEMENT_CACHE_MAX_AGE_SECONDS
from logging_config import get_logger
from orbit_tracker.catalog import Source
from orbit_tracker.celestrak import CelestrakClient
from orbit_tracker.elements import (
    OrbitalElementSet,
    dump_element_records,
    parse_element_records,
)
from orbit_tracker.errors import CacheError, CacheIOError
from orbit_tracker.store import ElementStore

logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LookupStatus(Enum):
    FRESH = "fresh"              # fetched during this call
    CACHED = "cached"            # served from a young cache entry
    STALE = "stale"              # old cache entry, refetch failed or not attempted
    UNAVAILABLE = "unavailable"  # nothing usable


@dataclass(frozen=True)
class ElementLookup:
    source: Source
    status: LookupStatus
    elements: Tuple[OrbitalElementSet, ...] = ()
    fetched_at: Optional[datetime] = None
    error: Optional[CacheError] = None

    @property
    def available(self) -> bool:
        return self.status is not LookupStatus.UNAVAILABLE


class ElementCacheManager:
    """Fetch, cache and staleness policy for element sets."""

    def __init__(self, store: ElementStore,
                 client: Optional[CelestrakClient] = None,
                 max_age: timedelta = timedelta(seconds=ELEMENT_CACHE_MAX_AGE_SECONDS),
                 clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.client = client or CelestrakClient()
        self.max_age = max_age
        self.clock = clock

    def _read_cached(self, source: Source):
        """
        Cached entry as (elements, fetched_at), or None.

        Unreadable entries are logged and treated as missing.
        """
        try:
            entry = self.store.get(source.key)
            if entry is None:
                return None
            elements = tuple(parse_element_records(list(entry.records)))
        except CacheError as e:
            logger.warning(f"Ignoring unreadable cache entry for {source.key}: {e}")
            return None
        return elements, entry.fetched_at

    def get(self, source: Source) -> ElementLookup:
        """Cached data for source without touching the network."""
        cached = self._read_cached(source)
        if cached is None:
            return ElementLookup(source, LookupStatus.UNAVAILABLE)

        elements, fetched_at = cached
        age = self.clock() - fetched_at
        status = LookupStatus.CACHED if age < self.max_age else LookupStatus.STALE
        return ElementLookup(source, status, elements, fetched_at)

    def refresh(self, source: Source) -> ElementLookup:
        """Serve, refetch or fall back according to the cache age."""
        now = self.clock()
        cached = self._read_cached(source)

        if cached is not None:
            elements, fetched_at = cached
            if now - fetched_at < self.max_age:
                logger.debug(f"Using cached element sets for {source.key}")
                return ElementLookup(source, LookupStatus.CACHED, elements, fetched_at)

        try:
            fetched = tuple(self.client.fetch(source))
        except CacheError as e:
            if cached is not None:
                elements, fetched_at = cached
                logger.warning(
                    f"Refetch of {source.key} failed, keeping data from "
                    f"{fetched_at.isoformat()}: {e}"
                )
                return ElementLookup(source, LookupStatus.STALE, elements, fetched_at, error=e)

            logger.error(f"Element sets for {source.key} unavailable: {e}")
            return ElementLookup(source, LookupStatus.UNAVAILABLE, error=e)

        try:
            self.store.put(source.key, dump_element_records(fetched), now)
        except CacheIOError as e:
            # The fetched data is still good for this cycle
            logger.warning(f"Could not persist element sets for {source.key}: {e}")

        return ElementLookup(source, LookupStatus.FRESH, fetched, now)

    def refresh_many(self, sources: Iterable[Source],
                     max_workers: int = 8) -> Dict[str, ElementLookup]:
        """Refresh several sources in parallel, keyed by source key."""
        sources = list(sources)
        if not sources:
            return {}

        with ThreadPoolExecutor(max_workers=min(max_workers, len(sources))) as executor:
            lookups = list(executor.map(self.refresh, sources))

        return {lookup.source.key: lookup for lookup in lookups}
