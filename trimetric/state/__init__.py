from .runtime import RuntimeDeps
from .settings import AppSettings
from .cancellation import CancellationToken
from .session import Record, Session, Snapshot, SessionOptions

__all__ = [
    "AppSettings",
    "CancellationToken",
    "Record",
    "RuntimeDeps",
    "Session",
    "SessionOptions",
    "Snapshot",
]
