"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from trimetric.errors import OptionsError
from trimetric.state import RuntimeDeps, Session
from trimetric.config.websocket import (
    WS_DENY_BUSY_STATUS,
    WS_CLOSE_TRY_AGAIN_CODE,
    WS_DENY_BAD_REQUEST_STATUS,
    WS_CLOSE_POLICY_VIOLATION_CODE,
)

from .session import run_session
from .errors import deny_upgrade
from .options import parse_session_options

logger = logging.getLogger(__name__)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    logger.info("Client connecting")
    try:
        options = parse_session_options(ws.query_params)
    except OptionsError as exc:
        logger.info("rejecting upgrade: %s", exc)
        await deny_upgrade(
            ws,
            status_code=WS_DENY_BAD_REQUEST_STATUS,
            message=str(exc),
            close_code=WS_CLOSE_POLICY_VIOLATION_CODE,
        )
        return

    if not await runtime_deps.connections.connect(ws):
        logger.warning("rejecting upgrade: server at capacity")
        await deny_upgrade(
            ws,
            status_code=WS_DENY_BUSY_STATUS,
            message="Server cannot accept new connections. Please try again later.",
            close_code=WS_CLOSE_TRY_AGAIN_CODE,
        )
        return

    try:
        await ws.accept()
        session = Session(options=options)
        logger.info(
            "Client v%d connected (chunkify=%s static=%s). Active: %s",
            options.version,
            options.chunkify,
            options.static,
            runtime_deps.connections.get_connection_count(),
        )
        await run_session(ws, session, runtime_deps.datasets, runtime_deps.settings)
    finally:
        held_s: float | None = None
        with contextlib.suppress(Exception):
            held_s = await runtime_deps.connections.disconnect(ws)
        logger.info(
            "Client disconnected after %.1fs. Active: %s",
            held_s or 0.0,
            runtime_deps.connections.get_connection_count(),
        )


__all__ = ["handle_websocket_connection"]
