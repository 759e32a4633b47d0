"""Admission control and instrumentation configuration (env-resolved constants only)."""

from __future__ import annotations

import os

_MAX_CONCURRENT_CONNECTIONS_RAW = (os.getenv("MAX_CONCURRENT_CONNECTIONS") or "").strip()
try:
    MAX_CONCURRENT_CONNECTIONS: int = int(_MAX_CONCURRENT_CONNECTIONS_RAW) if _MAX_CONCURRENT_CONNECTIONS_RAW else 1000
except Exception:
    MAX_CONCURRENT_CONNECTIONS = 1000
MAX_CONCURRENT_CONNECTIONS = max(1, int(MAX_CONCURRENT_CONNECTIONS))

# How often the connection observer samples the active session count. 0 disables it.
_OBSERVER_INTERVAL_RAW = (os.getenv("CONNECTION_OBSERVER_INTERVAL_S") or "").strip()
try:
    CONNECTION_OBSERVER_INTERVAL_S: float = float(_OBSERVER_INTERVAL_RAW) if _OBSERVER_INTERVAL_RAW else 2.0
except Exception:
    CONNECTION_OBSERVER_INTERVAL_S = 2.0
if CONNECTION_OBSERVER_INTERVAL_S < 0:
    CONNECTION_OBSERVER_INTERVAL_S = 0.0

__all__ = [
    "CONNECTION_OBSERVER_INTERVAL_S",
    "MAX_CONCURRENT_CONNECTIONS",
]
