"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    observer_interval_s: float


@dataclass(frozen=True, slots=True)
class PushSettings:
    initial_delay_s: float
    refresh_interval_s: float
    pacing_s: float
    chunk_size: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    endpoint_path: str
    write_queue_max: int


@dataclass(frozen=True, slots=True)
class DatasetSettings:
    data_path: Path | None


@dataclass(frozen=True, slots=True)
class AppSettings:
    limits: LimitsSettings
    push: PushSettings
    websocket: WebSocketSettings
    datasets: DatasetSettings


__all__ = [
    "AppSettings",
    "DatasetSettings",
    "LimitsSettings",
    "PushSettings",
    "WebSocketSettings",
]
