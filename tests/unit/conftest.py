from __future__ import annotations

import asyncio
import threading
from typing import Any

import orjson
import pytest

from trimetric.state.settings import PushSettings


class FakeWebSocket:
    """In-memory stand-in for a Starlette WebSocket used by session tests."""

    def __init__(self, *, fail_kinds: set[str] | None = None) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail_kinds = set(fail_kinds or ())
        self.close_count = 0
        self.close_code: int | None = None
        self._inbound: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    async def send_text(self, text: str) -> None:
        msg = orjson.loads(text)
        if msg["type"] in self.fail_kinds:
            raise RuntimeError(f"send of {msg['type']} failed")
        self.sent.append(msg)

    async def receive(self) -> dict[str, Any]:
        return await self._inbound.get()

    async def close(self, *, code: int = 1000, reason: str | None = None) -> None:
        self.close_count += 1
        self.close_code = code

    def send_from_client(self, text: str) -> None:
        self._inbound.put_nowait({"type": "websocket.receive", "text": text})

    def disconnect(self, code: int = 1001) -> None:
        self._inbound.put_nowait({"type": "websocket.disconnect", "code": code})

    def kinds(self) -> list[str]:
        return [m["type"] for m in self.sent]

    async def wait_for_messages(self, count: int, *, timeout: float = 2.0) -> None:
        async def _poll() -> None:
            while len(self.sent) < count:
                await asyncio.sleep(0.005)

        await asyncio.wait_for(_poll(), timeout=timeout)


class FakeDatasets:
    """Thread-safe provider with scripted results and failures."""

    def __init__(
        self,
        *,
        stops: list[dict[str, Any]] | None = None,
        routes: list[dict[str, Any]] | None = None,
        route_shapes: list[dict[str, Any]] | None = None,
        vehicles: list[dict[str, Any]] | None = None,
        fail: set[str] | None = None,
    ) -> None:
        self.stops = stops if stops is not None else [{"id": "s1"}]
        self.routes = routes if routes is not None else [{"id": "r1"}]
        self.route_shapes = route_shapes if route_shapes is not None else [{"route_id": "r1"}]
        self.vehicles = vehicles if vehicles is not None else [{"id": "v1", "timestamp": 100}]
        self.fail = set(fail or ())
        # Results for the refreshes that follow the first vehicles fetch. An
        # Exception instance is raised instead of returned.
        self.refreshes: list[Any] = []
        self.vehicle_calls: list[int] = []
        self._lock = threading.Lock()

    def _check(self, name: str) -> None:
        if name in self.fail:
            raise RuntimeError(f"{name} unavailable")

    def fetch_all_stops(self) -> list[dict[str, Any]]:
        self._check("stops")
        return list(self.stops)

    def fetch_routes(self) -> list[dict[str, Any]]:
        self._check("routes")
        return list(self.routes)

    def fetch_route_shapes(self) -> list[dict[str, Any]]:
        self._check("route_shapes")
        return list(self.route_shapes)

    def fetch_vehicle_positions(self, since: int = 0) -> list[dict[str, Any]]:
        with self._lock:
            first = len(self.vehicle_calls) == 0
            self.vehicle_calls.append(since)
            scripted = None if first or not self.refreshes else self.refreshes.pop(0)
        self._check("vehicles")
        if isinstance(scripted, Exception):
            raise scripted
        vehicles = self.vehicles if scripted is None else scripted
        return [v for v in vehicles if since == 0 or v.get("timestamp", 0) > since]


@pytest.fixture
def fake_ws() -> FakeWebSocket:
    return FakeWebSocket()


@pytest.fixture
def datasets() -> FakeDatasets:
    return FakeDatasets()


@pytest.fixture
def fast_push() -> PushSettings:
    return PushSettings(initial_delay_s=0.01, refresh_interval_s=0.05, pacing_s=0.0, chunk_size=100)


@pytest.fixture
def make_ws() -> type[FakeWebSocket]:
    return FakeWebSocket


@pytest.fixture
def make_datasets() -> type[FakeDatasets]:
    return FakeDatasets
