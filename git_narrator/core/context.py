"""Cooperative cancellation and deadlines for pipeline invocations."""

import asyncio
import time
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class ContextCancelledError(Exception):
    """Raised when work is abandoned because its context was cancelled."""


class DeadlineExceededError(ContextCancelledError):
    """Raised when work is abandoned because its context deadline passed."""


class ExecutionContext:
    """Cancellation token with an optional deadline.

    One context is created by the caller of the pipeline and handed down to
    every step. Blocking steps race their work against :meth:`done` so that a
    single ``cancel()`` call or deadline stops the whole invocation.

    ``err()`` and ``cancelled()`` may be called from worker threads.
    """

    def __init__(self, deadline: float | None = None) -> None:
        """
        Initialize ExecutionContext.

        Args:
            deadline: Absolute ``time.monotonic()`` value after which the
                      context reports :class:`DeadlineExceededError`
        """
        self._deadline = deadline
        self._cancel_event = asyncio.Event()

    @classmethod
    def with_timeout(cls, seconds: float) -> "ExecutionContext":
        """Create a context whose deadline is ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        """Cancel the context. Idempotent."""
        self._cancel_event.set()

    def cancelled(self) -> bool:
        return self.err() is not None

    def err(self) -> ContextCancelledError | None:
        """
        Return the reason the context is done, or None while it is live.

        Returns:
            DeadlineExceededError, ContextCancelledError, or None
        """
        if self._cancel_event.is_set():
            return ContextCancelledError("context cancelled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceededError("context deadline exceeded")
        return None

    async def done(self) -> None:
        """Wait until the context is cancelled or its deadline passes."""
        if self._deadline is None:
            await self._cancel_event.wait()
            return
        remaining = max(0.0, self._deadline - time.monotonic())
        try:
            await asyncio.wait_for(self._cancel_event.wait(), timeout=remaining)
        except asyncio.TimeoutError:
            pass

    async def race(self, awaitable: Awaitable[T]) -> T:
        """
        Await ``awaitable`` unless the context finishes first.

        When the context wins, the pending work is cancelled and the context
        error is raised. When both finish together the work result wins.

        Args:
            awaitable: Work to run

        Returns:
            The result of ``awaitable``

        Raises:
            ContextCancelledError: If the context is done before the work
        """
        work = asyncio.ensure_future(awaitable)
        err = self.err()
        if err is not None:
            work.cancel()
            await asyncio.gather(work, return_exceptions=True)
            raise err

        watcher = asyncio.ensure_future(self.done())
        try:
            done, _ = await asyncio.wait(
                {work, watcher}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            watcher.cancel()

        if work in done:
            return work.result()

        work.cancel()
        await asyncio.gather(work, return_exceptions=True)
        raise self.err() or ContextCancelledError("context cancelled")
