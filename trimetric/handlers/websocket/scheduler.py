"""Push scheduler: initial full snapshot, then periodic vehicle refreshes."""

from __future__ import annotations

import enum
import asyncio
import logging
from typing import Any

from trimetric.state.settings import PushSettings
from trimetric.state.session import Session, Snapshot
from trimetric.datasets import ALL_RECORDS, DatasetProvider
from trimetric.config.websocket import (
    WS_MSG_STOPS,
    WS_MSG_ROUTES,
    WS_MSG_TOTALS,
    WS_MSG_VEHICLES,
    WS_MSG_ROUTE_SHAPES,
)

from .writer import SessionWriter
from .chunking import send_chunked

logger = logging.getLogger(__name__)


class SchedulerState(enum.Enum):
    AWAITING_INITIAL = "awaiting_initial"
    STEADY_STATE = "steady_state"
    TERMINATED = "terminated"


class PushScheduler:
    """Drive one session's outbound cadence until its token is cancelled.

    After ``initial_delay_s`` the full burst goes out in the order totals,
    stops, routes, route_shapes, vehicles (static kinds only when the
    session asked for them). Then every ``refresh_interval_s`` the whole
    vehicle collection is fetched again and pushed. Ticks missed while a
    refresh was running are dropped, not queued.
    """

    def __init__(
        self,
        session: Session,
        snapshot: Snapshot,
        datasets: DatasetProvider,
        writer: SessionWriter,
        settings: PushSettings,
    ) -> None:
        self._session = session
        self._snapshot = snapshot
        self._datasets = datasets
        self._writer = writer
        self._settings = settings
        self.state = SchedulerState.AWAITING_INITIAL

    async def run(self) -> None:
        token = self._session.token
        loop = asyncio.get_running_loop()
        interval = self._settings.refresh_interval_s
        next_tick = loop.time() + interval
        try:
            if await token.sleep(self._settings.initial_delay_s):
                return
            if not await self._send_initial_burst():
                return
            self.state = SchedulerState.STEADY_STATE

            while True:
                if await token.sleep(next_tick - loop.time()):
                    return
                next_tick += interval
                now = loop.time()
                if next_tick <= now:
                    missed = int((now - next_tick) // interval) + 1
                    logger.debug("dropping %d missed refresh tick(s)", missed)
                    next_tick += missed * interval
                await self._refresh()
        finally:
            self.state = SchedulerState.TERMINATED

    async def _send_secondary(self, kind: str, data: Any) -> None:
        if not await self._writer.send(kind, data):
            logger.info("%s message not delivered; continuing", kind)

    async def _send_initial_burst(self) -> bool:
        snapshot = self._snapshot
        options = self._session.options
        token = self._session.token
        pacing = self._settings.pacing_s

        if not await self._writer.send(WS_MSG_TOTALS, snapshot.totals(), fatal=True):
            logger.warning("totals write failed; ending session")
            return False

        if options.static:
            if options.chunkify:
                await send_chunked(
                    self._writer,
                    WS_MSG_STOPS,
                    snapshot.stops,
                    chunk_size=self._settings.chunk_size,
                    pacing_s=pacing,
                    token=token,
                )
            else:
                await self._send_secondary(WS_MSG_STOPS, snapshot.stops)
            for kind, data in ((WS_MSG_ROUTES, snapshot.routes), (WS_MSG_ROUTE_SHAPES, snapshot.route_shapes)):
                if await token.sleep(pacing):
                    return True
                await self._send_secondary(kind, data)
            if await token.sleep(pacing):
                return True

        await self._send_secondary(WS_MSG_VEHICLES, snapshot.vehicles)
        return True

    async def _refresh(self) -> None:
        try:
            vehicles = await asyncio.to_thread(self._datasets.fetch_vehicle_positions, ALL_RECORDS)
        except Exception:
            logger.warning("vehicle refresh failed; retrying next tick", exc_info=True)
            return
        if self._session.token.cancelled:
            return

        vehicles = list(vehicles or [])
        self._snapshot.vehicles = vehicles
        self._session.observe_vehicles(vehicles)
        if not vehicles:
            logger.debug("vehicle refresh returned no records; skipping push")
            return
        # Not awaited: a slow write must not hold back the next tick.
        self._writer.post(WS_MSG_VEHICLES, vehicles, fatal=True)


__all__ = ["PushScheduler", "SchedulerState"]
