"""Single-writer task owning all outbound sends of one session."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from trimetric.state.cancellation import CancellationToken

from .envelope import encode_message

logger = logging.getLogger(__name__)

_Outbound = tuple[str, Any, bool, "asyncio.Future[bool]"]


def _resolve(fut: asyncio.Future[bool], ok: bool) -> None:
    if not fut.done():
        fut.set_result(ok)


class SessionWriter:
    """Serialize every envelope of a session through one task.

    The transport is not safe for concurrent sends, so producers enqueue
    messages and this task writes them one at a time, in order. Each
    message resolves a future with True once written, False otherwise.
    A failed write flagged ``fatal`` cancels the session.
    """

    def __init__(self, websocket: Any, token: CancellationToken, *, queue_max: int = 256) -> None:
        self._ws = websocket
        self._token = token
        self._queue: asyncio.Queue[_Outbound] = asyncio.Queue(maxsize=max(1, int(queue_max)))
        self._task: asyncio.Task | None = None
        self._current: asyncio.Future[bool] | None = None
        self.sent_count = 0

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._write_loop())
        return self._task

    def post(self, kind: str, data: Any, *, fatal: bool = False) -> asyncio.Future[bool]:
        """Enqueue a message without waiting for it to be written."""
        fut: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        if self._token.cancelled:
            fut.set_result(False)
            return fut
        try:
            self._queue.put_nowait((kind, data, fatal, fut))
        except asyncio.QueueFull:
            logger.warning("write queue full; dropping %s message", kind)
            fut.set_result(False)
        return fut

    async def send(self, kind: str, data: Any, *, fatal: bool = False) -> bool:
        """Enqueue a message and wait until it is written, dropped or the session is cancelled.

        A write stuck in the transport does not hold the caller past
        cancellation; teardown's :meth:`stop` cancels the stuck send.
        """
        fut = self.post(kind, data, fatal=fatal)
        if fut.done():
            return fut.result()
        cancelled = asyncio.ensure_future(self._token.wait())
        try:
            await asyncio.wait({fut, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
        if fut.done():
            return fut.result()
        return False

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(Exception, asyncio.CancelledError):
                await self._task
            self._task = None
        if self._current is not None:
            _resolve(self._current, False)
            self._current = None
        while not self._queue.empty():
            _kind, _data, _fatal, fut = self._queue.get_nowait()
            _resolve(fut, False)

    async def _write(self, kind: str, data: Any) -> bool:
        try:
            text = encode_message(kind, data)
        except (TypeError, ValueError):
            logger.exception("cannot encode %s message", kind)
            return False
        try:
            await self._ws.send_text(text)
        except WebSocketDisconnect:
            logger.info("%s write failed: client disconnected", kind)
            return False
        except Exception:
            if self._token.cancelled:
                # Transport is already being torn down.
                logger.debug("late %s write failed", kind, exc_info=True)
            else:
                logger.warning("%s write failed", kind, exc_info=True)
            return False
        self.sent_count += 1
        return True

    async def _write_loop(self) -> None:
        while True:
            kind, data, fatal, fut = await self._queue.get()
            if self._token.cancelled:
                _resolve(fut, False)
                continue
            self._current = fut
            ok = await self._write(kind, data)
            self._current = None
            _resolve(fut, ok)
            if not ok and fatal:
                self._token.cancel(f"{kind} write failed")


__all__ = ["SessionWriter"]
