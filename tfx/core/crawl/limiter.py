"""Two independent permit pools for filesystem reads and external processes."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager


class PermitPool:
    """A bounded semaphore that also records how many permits are held."""

    def __init__(self, name: str, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"{name} concurrency must be a positive integer, got {capacity}")
        self.name = name
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self.active = 0
        self.peak = 0

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one unit of capacity for the duration of the block."""
        async with self._semaphore:
            self.active += 1
            self.peak = max(self.peak, self.active)
            try:
                yield
            finally:
                self.active -= 1


class ConcurrencyLimiter:
    """Bounds simultaneous directory listings and validator invocations."""

    def __init__(self, max_concurrency_fs: int, max_concurrency_process: int) -> None:
        self._fs = PermitPool("filesystem", max_concurrency_fs)
        self._process = PermitPool("process", max_concurrency_process)

    def fs(self) -> AbstractAsyncContextManager[None]:
        return self._fs.permit()

    def process(self) -> AbstractAsyncContextManager[None]:
        return self._process.permit()

    @property
    def fs_active(self) -> int:
        return self._fs.active

    @property
    def fs_peak(self) -> int:
        return self._fs.peak

    @property
    def process_active(self) -> int:
        return self._process.active

    @property
    def process_peak(self) -> int:
        return self._process.peak
