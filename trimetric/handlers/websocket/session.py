"""Session supervisor: owns the tasks and teardown of one live connection."""

from __future__ import annotations

import logging
import contextlib
from typing import Any

from trimetric.state.session import Session
from trimetric.datasets import DatasetProvider
from trimetric.state.settings import AppSettings
from trimetric.config.websocket import WS_CLOSE_NORMAL_CODE

from .writer import SessionWriter
from .errors import close_quietly
from .watchdog import ReadWatchdog
from .scheduler import PushScheduler
from .aggregator import gather_snapshot

logger = logging.getLogger(__name__)


async def run_session(
    ws: Any,
    session: Session,
    datasets: DatasetProvider,
    settings: AppSettings,
) -> None:
    """Run an accepted connection until cancellation, then tear it down.

    Every exit path cancels the session token, stops the watchdog and the
    writer, and closes the transport exactly once.
    """
    token = session.token
    writer = SessionWriter(ws, token, queue_max=settings.websocket.write_queue_max)
    watchdog = ReadWatchdog(ws, token)
    writer.start()
    watchdog.start()
    try:
        snapshot = await gather_snapshot(datasets, session)
        if snapshot is None:
            logger.info("session aborted before first push: %s", token.reason)
            return
        scheduler = PushScheduler(session, snapshot, datasets, writer, settings.push)
        await scheduler.run()
    finally:
        token.cancel("session ended")
        with contextlib.suppress(Exception):
            await watchdog.stop()
        with contextlib.suppress(Exception):
            await writer.stop()
        await close_quietly(ws, code=WS_CLOSE_NORMAL_CODE)
        logger.info(
            "session finished reason=%s messages=%d since=%d",
            token.reason,
            writer.sent_count,
            session.since,
        )


__all__ = ["run_session"]
