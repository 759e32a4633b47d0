"""Error helpers for the live push channel."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


async def deny_upgrade(
    ws: WebSocket,
    *,
    status_code: int,
    message: str,
    close_code: int,
) -> None:
    """Refuse the handshake with a plain HTTP response before any transport work."""
    try:
        await ws.send_denial_response(PlainTextResponse(message, status_code=status_code))
    except RuntimeError:
        # Server lacks the denial-response extension; closing before accept still refuses it.
        logger.debug("denial response unsupported; closing with %s", close_code)
        with contextlib.suppress(Exception):
            await ws.close(code=close_code, reason=message)


async def close_quietly(ws: WebSocket, *, code: int) -> None:
    try:
        await ws.close(code=code)
    except Exception:
        logger.debug("WebSocket close failed", exc_info=True)


__all__ = ["close_quietly", "deny_upgrade"]
