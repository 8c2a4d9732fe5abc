"""Trailing-edge debounce on the asyncio event loop.

Debouncer collapses a burst of calls into one invocation of the wrapped
callback with the latest argument, after a quiet period. Used at the search
input boundary so intermediate keystrokes never reach the backing store.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Schedule callback(arg) after delay seconds; each new call supersedes the pending one.

    Single-threaded: must be called from a running event loop. Coroutine
    callbacks are started as tasks when the timer fires; a task that is still
    running when the next call fires is not cancelled (the consumer guards
    against stale results).
    """

    def __init__(
        self,
        callback: Callable[[T], Awaitable[None] | None],
        delay: float,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._callback = callback
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a scheduled call has not fired or been cancelled."""
        return self._handle is not None

    def __call__(self, arg: T) -> None:
        """Discard any pending call and schedule callback(arg) after the quiet interval."""
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self._delay, self._fire, arg)

    def cancel(self) -> None:
        """Drop the pending call, if any. No effect on callbacks already running."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def drain(self) -> None:
        """Cancel the pending call and wait for callback tasks already started."""
        self.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _fire(self, arg: T) -> None:
        self._handle = None
        result = self._callback(arg)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed", exc_info=exc)
