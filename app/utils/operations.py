"""
Cancellable simulated asynchronous operations

Sign-in and profile save have no real backend: they complete after a fixed
delay. Each of them runs as a PendingOperation wrapping an asyncio task, so
callers can await the result, cancel it on teardown, or inject an immediate
or failing completion in tests.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Completion = Callable[[], Awaitable[T]]


def delayed(value: T, delay_ms: int) -> Completion[T]:
    """
    Completion that resolves to ``value`` after ``delay_ms`` milliseconds

    Args:
        value: Result of the operation
        delay_ms: Delay in milliseconds (0 yields to the loop once)
    """
    async def _complete() -> T:
        await asyncio.sleep(max(delay_ms, 0) / 1000)
        return value

    return _complete


def immediate(value: T) -> Completion[T]:
    """Completion that resolves to ``value`` without waiting"""
    async def _complete() -> T:
        return value

    return _complete


def failing(exc: BaseException) -> Completion[Any]:
    """Completion that raises ``exc``"""
    async def _complete() -> Any:
        raise exc

    return _complete


class PendingOperation(Generic[T]):
    """
    Handle on a running simulated operation

    The optional ``on_done`` callback receives the result when the completion
    succeeds. It never runs after cancel() or when the completion raises.
    Must be created while an event loop is running.
    """

    def __init__(
        self,
        name: str,
        completion: Completion[T],
        on_done: Optional[Callable[[T], None]] = None,
    ) -> None:
        self.name = name
        self._completion = completion
        self._on_done = on_done
        self._task: asyncio.Task[T] = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._log_outcome)

    async def _run(self) -> T:
        result = await self._completion()
        if self._on_done is not None:
            self._on_done(result)
        return result

    def _log_outcome(self, task: asyncio.Task) -> None:
        if task.cancelled():
            logger.info(f"Operation {self.name} cancelled")
        elif task.exception() is not None:
            logger.warning(f"Operation {self.name} failed: {task.exception()}")
        else:
            logger.info(f"Operation {self.name} completed")

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    @property
    def failed(self) -> bool:
        return self._task.done() and not self._task.cancelled() and self._task.exception() is not None

    def cancel(self) -> bool:
        """Cancel the operation; returns False if it had already finished"""
        return self._task.cancel()

    async def wait(self) -> T:
        """
        Wait for the result

        Raises:
            asyncio.CancelledError: If the operation was cancelled
            Exception: Whatever the completion raised
        """
        return await asyncio.shield(self._task)

    def __await__(self):
        return self.wait().__await__()


class OperationScope:
    """Tracks pending operations of one owner so they can be cancelled together"""

    def __init__(self) -> None:
        self._operations: list[PendingOperation[Any]] = []

    def track(self, operation: PendingOperation[T]) -> PendingOperation[T]:
        self._operations = [op for op in self._operations if not op.done]
        self._operations.append(operation)
        return operation

    @property
    def pending(self) -> int:
        return sum(1 for op in self._operations if not op.done)

    def cancel_all(self) -> int:
        """Cancel every unfinished operation; returns how many were cancelled"""
        cancelled = 0
        for op in self._operations:
            if op.cancel():
                cancelled += 1
        self._operations = []
        return cancelled
