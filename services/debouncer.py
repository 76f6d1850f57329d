"""
services/debouncer.py – Trailing-edge debounce on the running asyncio loop.

Each ``schedule()`` call cancels the pending timer and arms a new one, so only
the action from the most recent call runs, once, after the quiet period.
Later schedule() calls never cancel actions that have already fired;
only cancel_running() does.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

logger = logging.getLogger(__name__)

Action = Callable[[], Any]


class Debouncer:
    """Coalesce bursts of trigger signals into a single deferred action."""

    def __init__(self) -> None:
        self._handle: Optional[asyncio.TimerHandle] = None
        self._running: Set["asyncio.Future[Any]"] = set()

    @property
    def pending(self) -> bool:
        """True while a scheduled action is waiting for its timer."""
        return self._handle is not None

    def schedule(self, action: Action, delay_ms: int) -> None:
        """
        Run *action* after *delay_ms* of quiescence.

        Must be called from within the event loop thread.
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay_ms / 1000.0, self._fire, action)

    def cancel(self) -> None:
        """Drop the pending invocation, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def cancel_running(self) -> None:
        """Cancel actions that have already fired and are still awaiting."""
        for task in list(self._running):
            task.cancel()

    async def join(self) -> None:
        """Wait for every action that has already fired to finish."""
        while self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    def _fire(self, action: Action) -> None:
        self._handle = None
        result = action()
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._running.add(task)
            task.add_done_callback(self._on_done)

    def _on_done(self, task: "asyncio.Future[Any]") -> None:
        self._running.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced action failed", exc_info=exc)
