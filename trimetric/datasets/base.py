"""Dataset provider interface consumed by the live session and the JSON endpoints."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from trimetric.state.session import Record

# Passing this as `since` requests every vehicle position.
ALL_RECORDS = 0


@runtime_checkable
class DatasetProvider(Protocol):
    """Blocking, read-only access to the four transit collections.

    Implementations must tolerate concurrent calls from many sessions.
    Any exception raised is a terminal failure for that fetch.
    """

    def fetch_all_stops(self) -> list[Record]: ...

    def fetch_routes(self) -> list[Record]: ...

    def fetch_route_shapes(self) -> list[Record]: ...

    def fetch_vehicle_positions(self, since: int = ALL_RECORDS) -> list[Record]: ...


__all__ = ["ALL_RECORDS", "DatasetProvider"]
