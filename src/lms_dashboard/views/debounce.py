"""Debounced search input."""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Deliver only the last value received within `delay_ms`.

    Each `push` restarts the timer; when it expires the callback gets the
    latest value.

    Usage:
        debouncer = Debouncer(300, page.apply_search)
        debouncer.push("alg")
        debouncer.push("algebra")   # only "algebra" is applied
    """

    def __init__(self, delay_ms: int, callback: Callable[[T], None]):
        self.delay = max(0, delay_ms) / 1000
        self._callback = callback
        self._task: asyncio.Task | None = None
        self._pending: T | None = None

    @property
    def is_pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def push(self, value: T) -> None:
        """Schedule `value`, cancelling any value not yet delivered."""
        self.cancel()
        self._pending = value
        self._task = asyncio.ensure_future(self._fire(value))

    async def _fire(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        self._task = None
        self._pending = None
        logger.debug("debounce_fired", value=value)
        self._callback(value)

    def flush(self) -> None:
        """Deliver the pending value now."""
        if not self.is_pending:
            return
        value = self._pending
        self.cancel()
        self._callback(value)  # type: ignore[arg-type]

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._pending = None

    async def wait(self) -> None:
        """Wait for the pending value (if any) to be delivered."""
        task = self._task
        if task is None:
            return
        await asyncio.wait({task})
