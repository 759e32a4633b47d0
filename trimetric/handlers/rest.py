"""Plain JSON endpoints: one dataset query per request, no session state."""

from __future__ import annotations

import math
import asyncio
import logging
from typing import Any
from collections.abc import Callable

from fastapi import Request, APIRouter, HTTPException

from trimetric.datasets import ALL_RECORDS, DatasetProvider
from trimetric.datasets.geo import within_box, within_distance

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1")


def _datasets(request: Request) -> DatasetProvider:
    runtime_deps = getattr(request.app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps.datasets


async def _query(label: str, fn: Callable[..., Any], *args: Any) -> Any:
    try:
        return await asyncio.to_thread(fn, *args)
    except Exception as exc:
        logger.exception("%s query failed", label)
        raise HTTPException(status_code=500, detail="Internal Server Error") from exc


def _float_params(request: Request, *names: str) -> list[float] | None:
    """All named query params as floats, or None when any is absent."""
    raw = [(request.query_params.get(name) or "").strip() for name in names]
    if not all(raw):
        return None
    values: list[float] = []
    for name, text in zip(names, raw):
        try:
            value = float(text)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"error parsing {name}: {text!r}") from None
        if not math.isfinite(value):
            raise HTTPException(status_code=400, detail=f"{name} must be finite")
        values.append(value)
    return values


@router.get("/stops")
async def stops(request: Request) -> dict[str, Any]:
    """All stops, or those inside a bounding box or within a distance of a point.

    The box (``west``/``south``/``east``/``north``) wins over the point search
    (``lat``/``lng``/``distance`` in meters) when both are given.
    """
    box = _float_params(request, "west", "south", "east", "north")
    point = None if box is not None else _float_params(request, "lat", "lng", "distance")
    records = await _query("stops", _datasets(request).fetch_all_stops)
    if box is not None:
        west, south, east, north = box
        records = within_box(records, west=west, south=south, east=east, north=north)
    elif point is not None:
        lat, lng, radius_m = point
        records = within_distance(records, lat=lat, lng=lng, radius_m=radius_m)
    return {"stops": records}


@router.get("/routes")
async def routes(request: Request) -> Any:
    return await _query("routes", _datasets(request).fetch_routes)


@router.get("/route_shapes")
async def route_shapes(request: Request) -> Any:
    return await _query("route_shapes", _datasets(request).fetch_route_shapes)


@router.get("/vehicles")
async def vehicles(request: Request) -> Any:
    raw = (request.query_params.get("since") or "").strip()
    since = ALL_RECORDS
    if raw:
        try:
            since = int(raw)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"error parsing since: {raw!r}") from None
        if since < 0:
            raise HTTPException(status_code=400, detail="since must be >= 0")
    return await _query("vehicles", _datasets(request).fetch_vehicle_positions, since)


__all__ = ["router"]
