"""
Element Store Backends

Key-value persistence for fetched element records, one JSON array per
source key plus the time it was fetched. The cache manager only talks to
the ElementStore interface, so storage mechanics stay out of the
freshness logic.

Backends:
- FileElementStore: <cache_dir>/<key>.json, fetch time kept as the mtime
- RedisElementStore: one hash per key holding records and fetched_at
- MemoryElementStore: process-local, mainly for tests and embedding

Every backend publishes a new entry in a single step, so a concurrent
reader of the same key sees either the old or the new entry in full.
"""

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import redis

from logging_config import get_logger
from orbit_tracker.errors import CacheIOError, ParseError

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    records: Tuple[dict, ...]
    fetched_at: datetime


class ElementStore(ABC):
    """Storage for element record arrays keyed by source key."""

    @abstractmethod
    def get(self, key: str) -> Optional[CacheEntry]:
        """
        Read the entry for key.

        Returns:
            The entry, or None if nothing is stored

        Raises:
            CacheIOError: storage could not be read
            ParseError: stored content is not a JSON array
        """

    @abstractmethod
    def put(self, key: str, records: List[dict], timestamp: datetime) -> None:
        """
        Replace the entry for key.

        Raises:
            CacheIOError: storage could not be written
        """

    def age_of(self, key: str, now: datetime) -> Optional[timedelta]:
        entry = self.get(key)
        if entry is None:
            return None
        return now - entry.fetched_at


def _decode_records(raw: str, where: str) -> Tuple[dict, ...]:
    try:
        records = json.loads(raw)
    except ValueError as e:
        raise ParseError(f"Cached elements in {where} are not valid JSON: {e}") from e
    if not isinstance(records, list):
        raise ParseError(f"Cached elements in {where} are not a JSON array")
    return tuple(records)


class FileElementStore(ElementStore):
    """One JSON file per key; the file mtime is the fetch time."""

    def __init__(self, cache_dir: str = "cache"):
        # Failing to create the directory is fatal at startup, so let OSError through
        os.makedirs(cache_dir, exist_ok=True)
        self.cache_dir = cache_dir

    def path_for(self, key: str) -> str:
        filename = key.lower().replace(os.sep, "_") + ".json"
        return os.path.join(self.cache_dir, filename)

    def get(self, key: str) -> Optional[CacheEntry]:
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                mtime = os.fstat(f.fileno()).st_mtime
                raw = f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheIOError(f"Cannot read {path}: {e}") from e

        return CacheEntry(
            records=_decode_records(raw, path),
            fetched_at=datetime.fromtimestamp(mtime, tz=timezone.utc),
        )

    def put(self, key: str, records: List[dict], timestamp: datetime) -> None:
        path = self.path_for(key)
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.cache_dir,
                prefix=".tmp-", suffix=".json", delete=False,
            ) as f:
                tmp_path = f.name
                json.dump(records, f)
                f.flush()
                os.fsync(f.fileno())

            ts = timestamp.timestamp()
            os.utime(tmp_path, (ts, ts))
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise CacheIOError(f"Cannot write {path}: {e}") from e

        logger.debug(f"Stored {len(records)} element records in {path}")


class RedisElementStore(ElementStore):
    """One Redis hash per key with "records" and "fetched_at" fields."""

    KEY_PREFIX = "elements:"

    def __init__(self, client):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisElementStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def _name(self, key: str) -> str:
        return self.KEY_PREFIX + key.lower()

    def get(self, key: str) -> Optional[CacheEntry]:
        name = self._name(key)
        try:
            fields = self.client.hgetall(name)
        except redis.RedisError as e:
            raise CacheIOError(f"Redis read of {name} failed: {e}") from e

        if not fields:
            return None

        try:
            fetched_at = datetime.fromisoformat(fields["fetched_at"])
            raw = fields["records"]
        except (KeyError, ValueError) as e:
            raise ParseError(f"Redis entry {name} is incomplete: {e}") from e

        return CacheEntry(records=_decode_records(raw, name), fetched_at=fetched_at)

    def put(self, key: str, records: List[dict], timestamp: datetime) -> None:
        name = self._name(key)
        try:
            self.client.hset(name, mapping={
                "records": json.dumps(records),
                "fetched_at": timestamp.astimezone(timezone.utc).isoformat(),
            })
        except redis.RedisError as e:
            raise CacheIOError(f"Redis write of {name} failed: {e}") from e


class MemoryElementStore(ElementStore):
    """Process-local store; entries are kept serialized so callers cannot mutate them."""

    def __init__(self):
        self._entries: Dict[str, Tuple[str, datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            stored = self._entries.get(key.lower())
        if stored is None:
            return None
        raw, fetched_at = stored
        return CacheEntry(records=_decode_records(raw, key), fetched_at=fetched_at)

    def put(self, key: str, records: List[dict], timestamp: datetime) -> None:
        raw = json.dumps(records)
        with self._lock:
            self._entries[key.lower()] = (raw, timestamp)
