"""Bounded-size delivery of large ordered collections."""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from collections.abc import Iterator, Sequence

from trimetric.state.cancellation import CancellationToken

from .writer import SessionWriter

logger = logging.getLogger(__name__)

T = TypeVar("T")


def iter_chunks(records: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield contiguous slices of at most ``size`` records, in order."""
    if size < 1:
        raise ValueError("chunk size must be >= 1")
    for start in range(0, len(records), size):
        yield list(records[start : start + size])


async def send_chunked(
    writer: SessionWriter,
    kind: str,
    records: Sequence[Any],
    *,
    chunk_size: int,
    pacing_s: float,
    token: CancellationToken,
) -> int:
    """Send ``records`` as ceil(N/chunk_size) messages paced by ``pacing_s``.

    A failed chunk is logged and the rest still go out. Returns the number
    of chunks written.
    """
    written = 0
    for index, chunk in enumerate(iter_chunks(records, chunk_size)):
        if index and await token.sleep(pacing_s):
            break
        if token.cancelled:
            break
        if await writer.send(kind, chunk):
            written += 1
        else:
            logger.info("%s chunk %d (%d records) not delivered", kind, index, len(chunk))
    return written


__all__ = ["iter_chunks", "send_chunked"]
