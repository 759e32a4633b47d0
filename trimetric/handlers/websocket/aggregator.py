"""Concurrent initial fetch of the four datasets for one session."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable

from trimetric.datasets import ALL_RECORDS, DatasetProvider
from trimetric.state.session import Record, Session, Snapshot

logger = logging.getLogger(__name__)


async def _fetch(session: Session, name: str, fn: Callable[..., list[Record]], *args: Any) -> list[Record] | None:
    try:
        result = await asyncio.to_thread(fn, *args)
    except Exception:
        logger.warning("initial %s fetch failed", name, exc_info=True)
        session.token.cancel(f"{name} fetch failed")
        return None
    return list(result or [])


async def gather_snapshot(datasets: DatasetProvider, session: Session) -> Snapshot | None:
    """Fetch stops, routes, route shapes and vehicles in parallel.

    All four fetches are awaited even when one fails, so none outlives the
    session. Returns None when any fetch failed or the session was cancelled
    meanwhile; otherwise the snapshot, with the session's high-water mark
    advanced to the newest vehicle timestamp.
    """
    stops, routes, route_shapes, vehicles = await asyncio.gather(
        _fetch(session, "stops", datasets.fetch_all_stops),
        _fetch(session, "routes", datasets.fetch_routes),
        _fetch(session, "route_shapes", datasets.fetch_route_shapes),
        _fetch(session, "vehicles", datasets.fetch_vehicle_positions, ALL_RECORDS),
    )
    if session.token.cancelled:
        return None

    snapshot = Snapshot(
        stops=stops or [],
        routes=routes or [],
        route_shapes=route_shapes or [],
        vehicles=vehicles or [],
    )
    session.observe_vehicles(snapshot.vehicles)
    logger.debug("snapshot gathered: %s since=%d", snapshot.totals(), session.since)
    return snapshot


__all__ = ["gather_snapshot"]
