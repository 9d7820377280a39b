"""
Scheduler - Delayed callbacks for the engine's timers.

The engine never sleeps or reads the wall clock. It asks a Scheduler to
run a callback after a delay in milliseconds and keeps the returned
handle so the callback can be cancelled.

Implementations:
- ManualScheduler: simulated clock advanced explicitly (tests, demos)
- AsyncioScheduler: real time on an asyncio event loop
"""

from __future__ import annotations
import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """A scheduled callback that can be cancelled."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call twice."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Interface for running callbacks after a delay."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once, delay_ms milliseconds from now."""


# =============================================================================
# Simulated clock
# =============================================================================

@dataclass(eq=False)
class ManualTimer(TimerHandle):
    """Timer entry on a ManualScheduler."""
    due_ms: int
    callback: Callable[[], None]
    _cancelled: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass
class ManualScheduler(Scheduler):
    """
    Scheduler driven by a simulated millisecond clock.

    Usage:
        scheduler = ManualScheduler()
        scheduler.call_later(400, shake)
        scheduler.advance(400)  # shake runs here

    Callbacks due at the same instant run in scheduling order.
    Callbacks scheduled while advancing run in the same advance if due.
    """
    now_ms: int = 0
    _queue: list[tuple[int, int, ManualTimer]] = field(default_factory=list)
    _counter: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimer:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        timer = ManualTimer(due_ms=self.now_ms + delay_ms, callback=callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._counter), timer))
        return timer

    def advance(self, ms: int) -> int:
        """
        Move the clock forward, firing every callback that falls due.

        Returns the number of callbacks run.
        """
        if ms < 0:
            raise ValueError(f"Cannot advance by a negative amount: {ms}")
        target = self.now_ms + ms
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due_ms, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = due_ms
            timer.callback()
            fired += 1

        self.now_ms = target
        return fired

    def run_all(self, limit: int = 10_000) -> int:
        """Fire pending callbacks until the queue is empty."""
        fired = 0
        while self._queue and fired < limit:
            fired += self.advance(self._queue[0][0] - self.now_ms)
            self._drop_cancelled()
        return fired

    @property
    def pending_count(self) -> int:
        """Number of live (uncancelled) timers."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)


# =============================================================================
# Real time
# =============================================================================

class AsyncioTimer(TimerHandle):
    """Wraps an asyncio.TimerHandle."""

    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """
    Scheduler backed by an asyncio event loop.

    When no loop is given, the running loop is looked up at scheduling
    time, so one scheduler can be created before the loop starts.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> AsyncioTimer:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("Scheduling callback in %dms", delay_ms)
        return AsyncioTimer(loop.call_later(delay_ms / 1000.0, callback))
