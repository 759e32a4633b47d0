"""Cooperative cancellation shared by every task of one session."""

from __future__ import annotations

import asyncio
import logging
import contextlib

logger = logging.getLogger(__name__)


class CancellationToken:
    """Idempotent one-shot signal.

    The first call to :meth:`cancel` records its reason; later calls are
    no-ops. Tasks observe the token at every suspension point through
    :meth:`wait` or :meth:`sleep`.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str) -> bool:
        if self._event.is_set():
            return False
        self._reason = reason
        self._event.set()
        logger.debug("session cancelled: %s", reason)
        return True

    async def wait(self) -> None:
        await self._event.wait()

    async def sleep(self, delay_s: float) -> bool:
        """Sleep up to ``delay_s``; return True if cancelled before the delay elapsed."""
        if self._event.is_set():
            return True
        if delay_s <= 0:
            return False
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._event.wait(), timeout=delay_s)
        return self._event.is_set()


__all__ = ["CancellationToken"]
