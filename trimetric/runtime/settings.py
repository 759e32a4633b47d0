"""Load runtime settings.

Configuration values are resolved from the environment in `trimetric/config/*`
and exposed here as structured dataclasses for the rest of the server.
"""

from __future__ import annotations

from trimetric.config.datasets import TRIMETRIC_DATA_PATH
from trimetric.config.websocket import WS_ENDPOINT_PATH, WS_WRITE_QUEUE_MAX
from trimetric.config.limits import MAX_CONCURRENT_CONNECTIONS, CONNECTION_OBSERVER_INTERVAL_S
from trimetric.state.settings import (
    AppSettings,
    PushSettings,
    LimitsSettings,
    DatasetSettings,
    WebSocketSettings,
)
from trimetric.config.push import (
    PUSH_PACING_MS,
    PUSH_CHUNK_SIZE,
    PUSH_INITIAL_DELAY_MS,
    PUSH_REFRESH_INTERVAL_MS,
)


def load_settings() -> AppSettings:
    return AppSettings(
        limits=LimitsSettings(
            max_concurrent_connections=MAX_CONCURRENT_CONNECTIONS,
            observer_interval_s=CONNECTION_OBSERVER_INTERVAL_S,
        ),
        push=PushSettings(
            initial_delay_s=PUSH_INITIAL_DELAY_MS / 1000.0,
            refresh_interval_s=PUSH_REFRESH_INTERVAL_MS / 1000.0,
            pacing_s=PUSH_PACING_MS / 1000.0,
            chunk_size=PUSH_CHUNK_SIZE,
        ),
        websocket=WebSocketSettings(
            endpoint_path=WS_ENDPOINT_PATH,
            write_queue_max=WS_WRITE_QUEUE_MAX,
        ),
        datasets=DatasetSettings(
            data_path=TRIMETRIC_DATA_PATH,
        ),
    )


__all__ = ["load_settings"]
