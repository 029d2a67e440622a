from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DeferredCallQueue:
    """
    Single-consumer FIFO of deferred callbacks.

    `call_soon` only enqueues; callbacks run when the owner calls `drain()`,
    after the detecting call has returned. Callbacks scheduled while draining
    run in the same drain.
    """

    def __init__(self) -> None:
        self._pending: deque[tuple[Callable[..., Any], tuple[Any, ...]]] = deque()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self._pending.append((callback, args))

    def drain(self) -> int:
        """Run every queued callback; returns how many ran."""
        ran = 0
        while self._pending:
            callback, args = self._pending.popleft()
            callback(*args)
            ran += 1

        if ran:
            logger.debug("Drained deferred callbacks", extra={"count": ran})
        return ran


class AsyncioScheduler:
    """Defers callbacks to the next iteration of an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon(callback, *args)
