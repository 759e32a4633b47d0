"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from trimetric.datasets import DatasetProvider
    from trimetric.state.settings import AppSettings
    from trimetric.handlers.observer import ConnectionObserver
    from trimetric.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    datasets: DatasetProvider
    settings: AppSettings
    observer: ConnectionObserver | None = None

    async def shutdown(self) -> None:
        if self.observer is None:
            return
        try:
            await self.observer.stop()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
