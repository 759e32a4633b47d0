"""Admission control for live sessions."""

from __future__ import annotations

import time
import asyncio
from typing import Any


class ConnectionManager:
    """Bound the number of concurrent live sessions.

    Sessions are admitted before the upgrade is accepted, so a full server
    can still refuse the handshake with a plain HTTP status.
    """

    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._admitted_at: dict[int, float] = {}
        self._peak = 0

    @property
    def max_connections(self) -> int:
        return self._max

    async def connect(self, ws: Any) -> bool:
        async with self._lock:
            if len(self._admitted_at) >= self._max:
                return False
            self._admitted_at[id(ws)] = time.monotonic()
            self._peak = max(self._peak, len(self._admitted_at))
            return True

    async def disconnect(self, ws: Any) -> float | None:
        """Release a session slot; return how long the session was held, if it was admitted."""
        async with self._lock:
            admitted = self._admitted_at.pop(id(ws), None)
        if admitted is None:
            return None
        return time.monotonic() - admitted

    def get_connection_count(self) -> int:
        return len(self._admitted_at)

    def get_peak_count(self) -> int:
        return self._peak


__all__ = ["ConnectionManager"]
