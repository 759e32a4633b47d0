"""Process-wide observer logging the number of live sessions."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from .connections import ConnectionManager

logger = logging.getLogger(__name__)


class ConnectionObserver:
    """Sample the active session count periodically and log changes.

    Pure instrumentation: sessions never depend on it.
    """

    def __init__(self, connections: ConnectionManager, *, interval_s: float) -> None:
        self._connections = connections
        self._interval_s = float(interval_s)
        self._task: asyncio.Task | None = None
        self.last_count = 0

    @property
    def enabled(self) -> bool:
        return self._interval_s > 0

    def start(self) -> asyncio.Task | None:
        if not self.enabled:
            return None
        if self._task is None:
            self._task = asyncio.create_task(self._observe_loop())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(Exception, asyncio.CancelledError):
            await self._task
        self._task = None

    def sample(self) -> bool:
        """Record the current count; return True if it changed since the last sample."""
        count = self._connections.get_connection_count()
        if count == self.last_count:
            return False
        logger.info(
            "active sessions: %d (was %d, peak %d, limit %d)",
            count,
            self.last_count,
            self._connections.get_peak_count(),
            self._connections.max_connections,
        )
        self.last_count = count
        return True

    async def _observe_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_s)
            self.sample()


__all__ = ["ConnectionObserver"]
