from __future__ import annotations

import asyncio

import pytest

from trimetric.state.cancellation import CancellationToken
from trimetric.handlers.websocket.writer import SessionWriter


@pytest.mark.asyncio
async def test_writer_preserves_post_order(fake_ws) -> None:
    token = CancellationToken()
    writer = SessionWriter(fake_ws, token)
    writer.start()
    futures = [writer.post("vehicles", [{"id": i}]) for i in range(20)]
    results = await asyncio.gather(*futures)
    await writer.stop()

    assert all(results)
    assert [m["data"][0]["id"] for m in fake_ws.sent] == list(range(20))
    assert writer.sent_count == 20


@pytest.mark.asyncio
async def test_writer_fatal_failure_cancels_session(make_ws) -> None:
    ws = make_ws(fail_kinds={"totals"})
    token = CancellationToken()
    writer = SessionWriter(ws, token)
    writer.start()

    assert await writer.send("totals", {}, fatal=True) is False
    assert token.cancelled
    assert token.reason == "totals write failed"
    await writer.stop()


@pytest.mark.asyncio
async def test_writer_non_fatal_failure_keeps_session(make_ws) -> None:
    ws = make_ws(fail_kinds={"routes"})
    token = CancellationToken()
    writer = SessionWriter(ws, token)
    writer.start()

    assert await writer.send("routes", []) is False
    assert not token.cancelled
    assert await writer.send("vehicles", []) is True
    await writer.stop()
    assert ws.kinds() == ["vehicles"]


@pytest.mark.asyncio
async def test_writer_drops_messages_after_cancellation(fake_ws) -> None:
    token = CancellationToken()
    writer = SessionWriter(fake_ws, token)
    writer.start()
    token.cancel("client disconnected")

    assert await writer.send("vehicles", []) is False
    await writer.stop()
    assert fake_ws.sent == []


@pytest.mark.asyncio
async def test_writer_stop_resolves_pending(fake_ws) -> None:
    token = CancellationToken()
    writer = SessionWriter(fake_ws, token)
    # Never started: everything stays queued until stop().
    fut = writer.post("vehicles", [])
    await writer.stop()
    assert fut.done()
    assert fut.result() is False


@pytest.mark.asyncio
async def test_writer_full_queue_drops_message(fake_ws) -> None:
    token = CancellationToken()
    writer = SessionWriter(fake_ws, token, queue_max=1)
    first = writer.post("vehicles", [])
    second = writer.post("vehicles", [])
    assert second.done() and second.result() is False
    writer.start()
    assert await first is True
    await writer.stop()


class _StalledWebSocket:
    """Transport whose sends never complete."""

    def __init__(self) -> None:
        self.started = asyncio.Event()

    async def send_text(self, text: str) -> None:
        self.started.set()
        await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_writer_send_returns_when_cancelled_during_stalled_write() -> None:
    ws = _StalledWebSocket()
    token = CancellationToken()
    writer = SessionWriter(ws, token)
    writer.start()
    pending = asyncio.create_task(writer.send("stops", [{"id": "s1"}]))
    await asyncio.wait_for(ws.started.wait(), timeout=1.0)

    token.cancel("client disconnected")

    assert await asyncio.wait_for(pending, timeout=1.0) is False
    await asyncio.wait_for(writer.stop(), timeout=1.0)
