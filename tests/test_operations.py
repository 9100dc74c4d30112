"""
Tests for cancellable simulated operations
"""

import asyncio

import pytest

from app.utils.operations import OperationScope, PendingOperation, delayed, failing, immediate


@pytest.mark.asyncio
async def test_delayed_completion_resolves_value():
    """A delayed operation resolves to its value and fires the callback once"""
    received = []
    op = PendingOperation("test", delayed("value", 10), received.append)

    assert await op == "value"
    assert received == ["value"]
    assert op.done
    assert not op.cancelled
    assert not op.failed


@pytest.mark.asyncio
async def test_immediate_completion():
    op = PendingOperation("test", immediate(42))
    assert await op.wait() == 42


@pytest.mark.asyncio
async def test_failing_completion_skips_callback():
    """A failing completion propagates its error and never calls back"""
    received = []
    op = PendingOperation("test", failing(RuntimeError("boom")), received.append)

    with pytest.raises(RuntimeError, match="boom"):
        await op

    assert received == []
    assert op.failed


@pytest.mark.asyncio
async def test_cancel_prevents_callback():
    """Cancelling a pending operation guarantees the callback never fires"""
    received = []
    op = PendingOperation("test", delayed("late", 10_000), received.append)

    assert op.cancel() is True
    with pytest.raises(asyncio.CancelledError):
        await op

    assert op.cancelled
    assert received == []


@pytest.mark.asyncio
async def test_cancel_after_completion_is_noop():
    op = PendingOperation("test", immediate("done"))
    await op

    assert op.cancel() is False
    assert not op.cancelled


@pytest.mark.asyncio
async def test_scope_cancels_all_pending():
    """OperationScope cancels unfinished operations only"""
    scope = OperationScope()
    finished = scope.track(PendingOperation("finished", immediate(1)))
    await finished
    slow = scope.track(PendingOperation("slow", delayed(2, 10_000)))

    assert scope.pending == 1
    assert scope.cancel_all() == 1
    with pytest.raises(asyncio.CancelledError):
        await slow
    assert scope.pending == 0
