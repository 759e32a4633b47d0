"""Live push timing settings (env-resolved constants only)."""

from __future__ import annotations

import os


def _get_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except Exception:
        return int(default)


# Delay between the end of aggregation and the first full snapshot.
PUSH_INITIAL_DELAY_MS: int = max(0, _get_int("PUSH_INITIAL_DELAY_MS", 1250))

# Period of the vehicle-only refresh.
PUSH_REFRESH_INTERVAL_MS: int = max(1, _get_int("PUSH_REFRESH_INTERVAL_MS", 5000))

# Pause between consecutive messages of the initial burst and between chunks.
PUSH_PACING_MS: int = max(0, _get_int("PUSH_PACING_MS", 25))

# Upper bound on records per chunked `stops` message.
PUSH_CHUNK_SIZE: int = max(1, _get_int("PUSH_CHUNK_SIZE", 100))

__all__ = [
    "PUSH_CHUNK_SIZE",
    "PUSH_INITIAL_DELAY_MS",
    "PUSH_PACING_MS",
    "PUSH_REFRESH_INTERVAL_MS",
]
