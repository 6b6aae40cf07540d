from __future__ import annotations

import logging
import threading
from typing import Optional

from core.cache import CacheStore

logger = logging.getLogger("greeter-api")

_LOGGED_KEYS_MAX = 20


class Sweeper:
    """Background thread that evicts expired cache entries on a fixed interval.

    The first sweep runs as soon as the sweeper starts. A failing sweep is
    logged and the schedule keeps going.
    """

    def __init__(self, store: CacheStore, interval_seconds: float = 10.0):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._store = store
        self._interval_seconds = interval_seconds
        self._state_lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        with self._state_lock:
            return self._thread is not None

    def start(self) -> None:
        with self._state_lock:
            if self._thread is not None:
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event,),
                name="cache-sweeper",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()
        logger.info("cache_sweeper_started", extra={"interval_s": self._interval_seconds})

    def stop(self) -> None:
        with self._state_lock:
            if self._thread is None:
                return
            thread, stop_event = self._thread, self._stop_event
            self._thread = None
            self._stop_event = None
            stop_event.set()
            # at most one sweeper thread alive at a time
            thread.join()
        logger.info("cache_sweeper_stopped")

    def tick(self) -> list[str]:
        try:
            removed = self._store.sweep_once()
        except Exception:
            logger.error("cache_sweep_failed", exc_info=True)
            return []

        if removed:
            logger.info(
                "cache_sweep",
                extra={"removed": len(removed), "removed_keys": removed[:_LOGGED_KEYS_MAX]},
            )
        return removed

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            self.tick()
            if stop_event.wait(self._interval_seconds):
                break
