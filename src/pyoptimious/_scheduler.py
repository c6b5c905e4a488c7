"""Repeating task scheduling behind a swappable interface."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

_logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class ScheduledTask(Protocol):
    """Handle of a running repeating task."""

    @property
    def active(self) -> bool:
        ...

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Starts repeating tasks.

    ``start`` must not await the callback: each firing runs independently,
    so a slow callback does not delay the next firing.
    """

    def start(self, interval: float, callback: TickCallback) -> ScheduledTask:
        ...


class _LoopInterval:
    """Fixed-rate repeating timer on an asyncio event loop.

    Loop timers do not keep ``asyncio.run()`` alive on their own.
    Cancelling stops future firings; callbacks already running are left
    to complete.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: TickCallback) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._tasks: set[asyncio.Task[None]] = set()
        self._deadline = loop.time() + interval
        self._handle: asyncio.TimerHandle | None = loop.call_at(self._deadline, self._fire)

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def _fire(self) -> None:
        if self._handle is None:
            return
        task = self._loop.create_task(self._run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        # Skip missed deadlines instead of firing a burst after a stall.
        now = self._loop.time()
        self._deadline += self._interval
        if self._deadline <= now:
            missed = int((now - self._deadline) // self._interval) + 1
            self._deadline += missed * self._interval
        self._handle = self._loop.call_at(self._deadline, self._fire)

    async def _run(self) -> None:
        try:
            await self._callback()
        except Exception:
            _logger.exception("Scheduled callback failed")

    def cancel(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()


class AsyncioScheduler:
    """Default scheduler backed by the running asyncio event loop."""

    def start(self, interval: float, callback: TickCallback) -> _LoopInterval:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        return _LoopInterval(asyncio.get_running_loop(), interval, callback)
