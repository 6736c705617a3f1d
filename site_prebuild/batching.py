"""Bounded batching of concurrent handler operations."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Generic, List, TypeVar

logger = logging.getLogger("site_prebuild")

T = TypeVar("T")


class TaskWindow(Generic[T]):
    """Accumulate pending operations and await them in fixed-size groups.

    Operations start running as soon as they are submitted. Once ``size``
    operations are pending, :meth:`submit` waits for all of them before
    returning, so at most ``size`` operations are ever in flight. The first
    failure in a group propagates out of :meth:`submit` or :meth:`drain`.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Window size must be positive, got {size}")
        self.size = size
        self._pending: List[asyncio.Task] = []
        self._batches = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def batches(self) -> int:
        """Number of groups awaited so far."""
        return self._batches

    async def submit(self, operation: Awaitable[T]) -> List[T]:
        """Schedule ``operation``; returns completed results when a group fills."""
        self._pending.append(asyncio.ensure_future(operation))
        if len(self._pending) >= self.size:
            return await self.drain()
        return []

    async def drain(self) -> List[T]:
        """Await every pending operation, returning results in submission order."""
        if not self._pending:
            return []
        batch, self._pending = self._pending, []
        self._batches += 1
        logger.debug("Awaiting batch %d (%d operations)", self._batches, len(batch))
        try:
            return list(await asyncio.gather(*batch))
        except BaseException:
            for task in batch:
                task.cancel()
            raise
