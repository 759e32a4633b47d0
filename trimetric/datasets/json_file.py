"""Dataset provider backed by a JSON document on disk."""

from __future__ import annotations

import logging
import threading
from typing import Any
from pathlib import Path

import orjson

from trimetric.errors import DatasetError
from trimetric.state.session import Record

from .base import ALL_RECORDS

logger = logging.getLogger(__name__)

_COLLECTIONS = ("stops", "routes", "route_shapes", "vehicles")


class JsonFileDatasets:
    """Serve collections from ``{"stops": [...], "routes": [...], ...}``.

    The document is re-read when its modification time changes, so an
    ingestion job can atomically replace the file while the server runs.
    Without a path every collection is empty.
    """

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._mtime_ns: int | None = None
        self._data: dict[str, list[Record]] = {name: [] for name in _COLLECTIONS}

    @property
    def path(self) -> Path | None:
        return self._path

    def _load(self) -> dict[str, list[Record]]:
        if self._path is None:
            return self._data
        with self._lock:
            try:
                mtime_ns = self._path.stat().st_mtime_ns
            except OSError as exc:
                raise DatasetError("datasets", f"cannot stat {self._path}: {exc}") from exc
            if mtime_ns == self._mtime_ns:
                return self._data
            try:
                raw: Any = orjson.loads(self._path.read_bytes())
            except (OSError, orjson.JSONDecodeError) as exc:
                raise DatasetError("datasets", f"cannot load {self._path}: {exc}") from exc
            if not isinstance(raw, dict):
                raise DatasetError("datasets", f"{self._path} must hold a JSON object")

            data: dict[str, list[Record]] = {}
            for name in _COLLECTIONS:
                items = raw.get(name) or []
                if not isinstance(items, list):
                    raise DatasetError(name, f"'{name}' must be a list")
                data[name] = [item for item in items if isinstance(item, dict)]
            self._data = data
            self._mtime_ns = mtime_ns
            logger.info(
                "datasets loaded from %s: %s",
                self._path,
                ", ".join(f"{name}={len(data[name])}" for name in _COLLECTIONS),
            )
            return data

    def fetch_all_stops(self) -> list[Record]:
        return list(self._load()["stops"])

    def fetch_routes(self) -> list[Record]:
        return list(self._load()["routes"])

    def fetch_route_shapes(self) -> list[Record]:
        return list(self._load()["route_shapes"])

    def fetch_vehicle_positions(self, since: int = ALL_RECORDS) -> list[Record]:
        vehicles = self._load()["vehicles"]
        if since == ALL_RECORDS:
            return list(vehicles)
        return [v for v in vehicles if isinstance(v.get("timestamp"), int) and v["timestamp"] > since]


__all__ = ["JsonFileDatasets"]
