"""Tests for the reference-counted error channel."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from tfx.core.crawl.channel import error_channel
from tfx.core.errors import ChannelClosedError, TraversalError


async def _drain(receiver) -> list:
    return [error async for error in receiver]


@pytest.mark.asyncio
async def test_closing_only_sender_ends_iteration() -> None:
    sender, receiver = error_channel()
    sender.close()
    assert await _drain(receiver) == []


@pytest.mark.asyncio
async def test_errors_sent_before_closure_are_delivered() -> None:
    sender, receiver = error_channel()
    first = TraversalError(Path("/a"), "x")
    second = TraversalError(Path("/b"), "y")
    sender.send(first)
    sender.send(second)
    sender.close()
    assert await _drain(receiver) == [first, second]


@pytest.mark.asyncio
async def test_clone_keeps_channel_open() -> None:
    sender, receiver = error_channel()
    clone = sender.clone()
    sender.close()

    error = TraversalError(Path("/late"), "z")
    clone.send(error)
    clone.close()
    assert await _drain(receiver) == [error]


@pytest.mark.asyncio
async def test_receiver_waits_for_last_sender() -> None:
    sender, receiver = error_channel()
    clones = [sender.clone() for _ in range(3)]
    sender.close()

    async def release() -> None:
        for clone in clones:
            await asyncio.sleep(0.01)
            clone.close()

    releasing = asyncio.create_task(release())
    assert await asyncio.wait_for(_drain(receiver), timeout=2) == []
    await releasing
    assert all(not clone.is_open for clone in clones)


@pytest.mark.asyncio
async def test_close_is_idempotent() -> None:
    sender, receiver = error_channel()
    clone = sender.clone()
    sender.close()
    sender.close()
    # A double close must not release the clone's hold on the channel.
    assert clone.is_open
    recv = asyncio.create_task(receiver.recv())
    await asyncio.sleep(0.01)
    assert not recv.done()
    clone.close()
    assert await recv is None


@pytest.mark.asyncio
async def test_context_manager_closes_sender() -> None:
    sender, receiver = error_channel()
    with sender:
        assert sender.is_open
    assert not sender.is_open
    assert await receiver.recv() is None
    assert await receiver.recv() is None


@pytest.mark.asyncio
async def test_send_after_close_raises() -> None:
    sender, _receiver = error_channel()
    sender.close()
    with pytest.raises(ChannelClosedError):
        sender.send(TraversalError(Path("/a"), "x"))
    with pytest.raises(ChannelClosedError):
        sender.clone()
