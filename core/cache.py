"""In-memory TTL cache for rendered responses.

This cache is process-local. It is safe for concurrent access from the request
handlers and the background sweeper thread, but it is not shared across
workers/instances. Entries only ever expire by elapsed time.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    created_at: float
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


class CacheStore:
    def __init__(
        self,
        ttl_seconds: float = 10.0,
        time_func: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._time_func = time_func
        self.ttl_seconds = ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            if not entry.is_live(self._time_func()):
                self._store.pop(key, None)
                return None
            return entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._time_func()
            self._store[key] = CacheEntry(
                key=key,
                value=value,
                created_at=now,
                expires_at=now + self.ttl_seconds,
            )

    def sweep_once(self) -> list[str]:
        """Remove every expired entry and return the removed keys."""
        with self._lock:
            now = self._time_func()
            expired_keys = [
                key for key, entry in self._store.items() if not entry.is_live(now)
            ]
            for key in expired_keys:
                del self._store[key]
            return expired_keys

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
