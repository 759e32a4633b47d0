"""Dataset source configuration (env-resolved constants only)."""

from __future__ import annotations

import os
from pathlib import Path

# JSON document holding stops, routes, route_shapes and vehicles. Empty means no data.
_DATA_PATH_RAW = (os.getenv("TRIMETRIC_DATA_PATH") or "").strip()
TRIMETRIC_DATA_PATH: Path | None = Path(_DATA_PATH_RAW).expanduser() if _DATA_PATH_RAW else None

__all__ = ["TRIMETRIC_DATA_PATH"]
