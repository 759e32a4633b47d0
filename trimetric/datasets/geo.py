"""Spatial filters over stop records carrying ``lat``/``lng`` coordinates."""

from __future__ import annotations

import math
from typing import Any
from collections.abc import Iterable

EARTH_RADIUS_M = 6_371_000.0


def distance_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters between two WGS-84 points."""
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlng / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _coords(record: dict[str, Any]) -> tuple[float, float] | None:
    lat, lng = record.get("lat"), record.get("lng")
    if isinstance(lat, bool) or isinstance(lng, bool):
        return None
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return None
    return float(lat), float(lng)


def within_box(
    stops: Iterable[dict[str, Any]], *, west: float, south: float, east: float, north: float
) -> list[dict[str, Any]]:
    """Stops inside the bounding box, edges included. Records without coordinates are skipped."""
    found: list[dict[str, Any]] = []
    for stop in stops:
        coords = _coords(stop)
        if coords is None:
            continue
        lat, lng = coords
        if south <= lat <= north and west <= lng <= east:
            found.append(stop)
    return found


def within_distance(
    stops: Iterable[dict[str, Any]], *, lat: float, lng: float, radius_m: float
) -> list[dict[str, Any]]:
    """Stops within ``radius_m`` of a point, nearest first.

    Each returned record is a copy with a ``distance`` key in meters.
    """
    found: list[dict[str, Any]] = []
    for stop in stops:
        coords = _coords(stop)
        if coords is None:
            continue
        dist = distance_m(lat, lng, *coords)
        if dist <= radius_m:
            found.append({**stop, "distance": dist})
    found.sort(key=lambda s: s["distance"])
    return found


__all__ = ["EARTH_RADIUS_M", "distance_m", "within_box", "within_distance"]
