from __future__ import annotations

import asyncio

import pytest

from trimetric.state.cancellation import CancellationToken
from trimetric.handlers.websocket.watchdog import ReadWatchdog


class _BrokenWebSocket:
    async def receive(self):
        raise RuntimeError("protocol error")


@pytest.mark.asyncio
async def test_watchdog_cancels_on_disconnect(fake_ws) -> None:
    token = CancellationToken()
    watchdog = ReadWatchdog(fake_ws, token)
    task = watchdog.start()

    fake_ws.send_from_client("hello")
    await asyncio.sleep(0.01)
    assert not token.cancelled

    fake_ws.disconnect()
    await asyncio.wait_for(task, timeout=1.0)
    assert token.reason == "client disconnected"
    await watchdog.stop()


@pytest.mark.asyncio
async def test_watchdog_cancels_on_read_error() -> None:
    token = CancellationToken()
    watchdog = ReadWatchdog(_BrokenWebSocket(), token)
    await asyncio.wait_for(watchdog.start(), timeout=1.0)
    assert token.reason == "read failed"


@pytest.mark.asyncio
async def test_watchdog_stop_does_not_cancel_session(fake_ws) -> None:
    token = CancellationToken()
    watchdog = ReadWatchdog(fake_ws, token)
    watchdog.start()
    await watchdog.stop()
    assert not token.cancelled
