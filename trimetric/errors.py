"""Shared error types for the Trimetric server."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, slots=True)
class OptionsError(ValueError):
    """Raised when a connection upgrade carries a malformed query option."""

    option: str
    value: str
    reason: str

    def __str__(self) -> str:
        return f"invalid {self.option}={self.value!r}: {self.reason}"


@dataclass(eq=False, slots=True)
class DatasetError(Exception):
    """Raised when a dataset provider fails to produce a collection."""

    dataset: str
    reason: str

    def __str__(self) -> str:
        return f"{self.dataset} fetch failed: {self.reason}"


__all__ = ["DatasetError", "OptionsError"]
