"""Runtime dependency construction (datasets + admission control)."""

from __future__ import annotations

import logging

from trimetric.state import RuntimeDeps
from trimetric.state.settings import AppSettings
from trimetric.handlers.observer import ConnectionObserver
from trimetric.handlers.connections import ConnectionManager
from trimetric.datasets import DatasetProvider, JsonFileDatasets

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(
    settings: AppSettings | None = None,
    datasets: DatasetProvider | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()

    if datasets is None:
        datasets = JsonFileDatasets(settings.datasets.data_path)
        if settings.datasets.data_path is None:
            logger.warning("TRIMETRIC_DATA_PATH is not set; serving empty datasets")

    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)
    observer = ConnectionObserver(connections, interval_s=settings.limits.observer_interval_s)
    observer.start()

    return RuntimeDeps(
        connections=connections,
        datasets=datasets,
        settings=settings,
        observer=observer,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
