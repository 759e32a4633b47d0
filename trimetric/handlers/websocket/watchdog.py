"""Read-side watchdog detecting peer close on the push channel."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

from trimetric.state.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class ReadWatchdog:
    """Keep a blocking receive outstanding so a peer close cancels the session.

    Clients are not expected to send anything; inbound frames are discarded.
    """

    def __init__(self, websocket: Any, token: CancellationToken) -> None:
        self._ws = websocket
        self._token = token
        self._task: asyncio.Task | None = None

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._read_loop())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(Exception):
            await self._task
        self._task = None

    async def _read_loop(self) -> None:
        try:
            while not self._token.cancelled:
                message = await self._ws.receive()
                if message.get("type") == "websocket.disconnect":
                    logger.info("client closed connection code=%s", message.get("code"))
                    self._token.cancel("client disconnected")
                    return
        except asyncio.CancelledError:
            return
        except Exception as exc:
            logger.info("read failed, cancelling session: %s", exc)
            self._token.cancel("read failed")


__all__ = ["ReadWatchdog"]
