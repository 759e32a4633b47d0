"""Outbound `{type, data}` envelope for the live push channel."""

from __future__ import annotations

from typing import Any

import orjson

from trimetric.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_TYPE,
    WS_MSG_STOPS,
    WS_MSG_ROUTES,
    WS_MSG_TOTALS,
    WS_MSG_VEHICLES,
    WS_MSG_ROUTE_SHAPES,
)

# Initial burst order; clients build their state incrementally in this order.
MESSAGE_KINDS: tuple[str, ...] = (
    WS_MSG_TOTALS,
    WS_MSG_STOPS,
    WS_MSG_ROUTES,
    WS_MSG_ROUTE_SHAPES,
    WS_MSG_VEHICLES,
)


def build_message(kind: str, data: Any) -> dict[str, Any]:
    if kind not in MESSAGE_KINDS:
        raise ValueError(f"unknown message kind {kind!r}")
    return {WS_KEY_TYPE: kind, WS_KEY_DATA: data}


def encode_message(kind: str, data: Any) -> str:
    return orjson.dumps(build_message(kind, data)).decode("utf-8")


__all__ = ["MESSAGE_KINDS", "build_message", "encode_message"]
