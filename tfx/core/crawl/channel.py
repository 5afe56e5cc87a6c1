"""Multi-producer, single-consumer error channel with automatic closure.

Every task that may report an error owns an ``ErrorSender``. Senders are
reference counted: ``clone`` adds a holder and ``close`` drops one. When the
last holder closes, the receiver's iteration ends. The consumer therefore
learns that every producer has finished without counting tasks itself.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from types import TracebackType
from typing import cast

from tfx.core.errors import ChannelClosedError, TfxError

_CLOSED = object()


class _ChannelState:
    """State shared by every sender and the receiver of one channel."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue[object] = asyncio.Queue()
        self.senders = 0
        self.closed = False

    def acquire(self) -> None:
        if self.closed:
            raise ChannelClosedError("cannot clone a sender of a closed channel")
        self.senders += 1

    def release(self) -> None:
        self.senders -= 1
        if self.senders == 0:
            self.closed = True
            self.queue.put_nowait(_CLOSED)


class ErrorSender:
    """A sending handle. Close it (or use it as a context manager) when done."""

    def __init__(self, state: _ChannelState) -> None:
        state.acquire()
        self._state = state
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def clone(self) -> ErrorSender:
        """Return a new independently owned handle on the same channel."""
        if not self._open:
            raise ChannelClosedError("cannot clone a closed sender")
        return ErrorSender(self._state)

    def send(self, error: TfxError) -> None:
        if not self._open:
            raise ChannelClosedError("cannot send on a closed sender")
        self._state.queue.put_nowait(error)

    def close(self) -> None:
        """Drop this handle. Idempotent."""
        if not self._open:
            return
        self._open = False
        self._state.release()

    def __enter__(self) -> ErrorSender:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class ErrorReceiver:
    """The single consuming end. Iterate it to drain errors until closure."""

    def __init__(self, state: _ChannelState) -> None:
        self._state = state
        self._drained = False

    async def recv(self) -> TfxError | None:
        """Return the next error, or None once every sender has closed."""
        if self._drained:
            return None
        item = await self._state.queue.get()
        if item is _CLOSED:
            self._drained = True
            return None
        return cast(TfxError, item)

    def __aiter__(self) -> AsyncIterator[TfxError]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[TfxError]:
        while (error := await self.recv()) is not None:
            yield error


def error_channel() -> tuple[ErrorSender, ErrorReceiver]:
    """Create a channel and return its first sender and its receiver."""
    state = _ChannelState()
    return ErrorSender(state), ErrorReceiver(state)
