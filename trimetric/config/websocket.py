"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

WS_ENDPOINT_PATH: str = (os.getenv("WS_ENDPOINT_PATH") or "").strip() or "/api/v1/ws"

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_DATA = "data"

# Message kinds, in initial burst order
WS_MSG_TOTALS = "totals"
WS_MSG_STOPS = "stops"
WS_MSG_ROUTES = "routes"
WS_MSG_ROUTE_SHAPES = "route_shapes"
WS_MSG_VEHICLES = "vehicles"

# Upgrade query options
WS_OPT_VERSION = "version"
WS_OPT_CHUNKIFY = "chunkify"
WS_OPT_STATIC = "static"

# The protocol version travels as a signed 8-bit value.
WS_MAX_PROTOCOL_VERSION = 127

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_POLICY_VIOLATION_CODE = 1008
WS_CLOSE_TRY_AGAIN_CODE = 1013

# Upgrade denial statuses
WS_DENY_BAD_REQUEST_STATUS = 400
WS_DENY_BUSY_STATUS = 503

_WRITE_QUEUE_MAX_RAW = (os.getenv("WS_WRITE_QUEUE_MAX") or "").strip()
try:
    WS_WRITE_QUEUE_MAX: int = int(_WRITE_QUEUE_MAX_RAW) if _WRITE_QUEUE_MAX_RAW else 256
except Exception:
    WS_WRITE_QUEUE_MAX = 256
WS_WRITE_QUEUE_MAX = max(1, int(WS_WRITE_QUEUE_MAX))

__all__ = [
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_POLICY_VIOLATION_CODE",
    "WS_CLOSE_TRY_AGAIN_CODE",
    "WS_DENY_BAD_REQUEST_STATUS",
    "WS_DENY_BUSY_STATUS",
    "WS_ENDPOINT_PATH",
    "WS_KEY_DATA",
    "WS_KEY_TYPE",
    "WS_MAX_PROTOCOL_VERSION",
    "WS_MSG_ROUTES",
    "WS_MSG_ROUTE_SHAPES",
    "WS_MSG_STOPS",
    "WS_MSG_TOTALS",
    "WS_MSG_VEHICLES",
    "WS_OPT_CHUNKIFY",
    "WS_OPT_STATIC",
    "WS_OPT_VERSION",
    "WS_WRITE_QUEUE_MAX",
]
