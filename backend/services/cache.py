"""Simple in-memory response cache keyed by upstream URL. No Redis needed.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
the same URL may be fetched twice (once per worker). This is acceptable for
this project's scale.

Entries never expire on their own: freshness is checked by the reader
against the stored timestamp, and stale entries stay resident until they are
overwritten or the whole store is cleared.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    stored_at: float

    def is_fresh(self, ttl_seconds: float, now: float) -> bool:
        return now - self.stored_at < ttl_seconds


class ResponseCache:
    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(key=key, payload=payload, stored_at=self.clock())
        with self._lock:
            self._store[key] = entry
        return entry

    def clear(self) -> int:
        with self._lock:
            self._store.clear()
            return len(self._store)

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def __len__(self) -> int:
        return self.size()
