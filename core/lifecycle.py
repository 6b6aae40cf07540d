from __future__ import annotations

from core.sweeper import Sweeper


class CacheLifecycle:
    """Start/stop hooks for the response cache, called at boot and shutdown."""

    def __init__(self, sweeper: Sweeper):
        self._sweeper = sweeper

    @property
    def running(self) -> bool:
        return self._sweeper.is_running

    def start(self) -> None:
        self._sweeper.start()

    def stop(self) -> None:
        self._sweeper.stop()
