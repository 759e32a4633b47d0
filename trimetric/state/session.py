"""Per-connection session state (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

from .cancellation import CancellationToken

Record = dict[str, Any]


@dataclass(frozen=True, slots=True)
class SessionOptions:
    version: int = 0
    chunkify: bool = True
    static: bool = True


@dataclass(slots=True)
class Snapshot:
    stops: list[Record] = field(default_factory=list)
    routes: list[Record] = field(default_factory=list)
    route_shapes: list[Record] = field(default_factory=list)
    vehicles: list[Record] = field(default_factory=list)

    def totals(self) -> dict[str, int]:
        return {
            "stops": len(self.stops),
            "routes": len(self.routes),
            "route_shapes": len(self.route_shapes),
            "vehicles": len(self.vehicles),
        }


@dataclass(slots=True)
class Session:
    options: SessionOptions
    token: CancellationToken = field(default_factory=CancellationToken)
    since: int = 0

    def observe_vehicles(self, vehicles: list[Record]) -> int:
        """Advance the high-water mark to the newest vehicle timestamp seen."""
        for vehicle in vehicles:
            ts = vehicle.get("timestamp")
            if isinstance(ts, int) and not isinstance(ts, bool) and ts > self.since:
                self.since = ts
        return self.since


__all__ = ["Record", "Session", "SessionOptions", "Snapshot"]
