"""
Session Clock - Countdown for the timed board.

States:
    IDLE     created, not yet started (starts on the first accepted pick)
    RUNNING  ticking once per second
    EXPIRED  reached zero; the session is over
    STOPPED  halted early by a win or a reset
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Callable

from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000
DEFAULT_MAX_TIME_SECONDS = 20


class ClockState(Enum):
    """Lifecycle of the countdown."""
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"
    STOPPED = "stopped"


class SessionClock:
    """
    One-second countdown driven by a Scheduler.

    on_tick(seconds_left) runs after every decrement, including the one
    that reaches zero; on_expire() runs right after that final tick.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        max_time_seconds: int = DEFAULT_MAX_TIME_SECONDS,
        on_tick: Callable[[int], None] | None = None,
        on_expire: Callable[[], None] | None = None,
    ):
        self.scheduler = scheduler
        self.max_time_seconds = max_time_seconds
        self.time_left_seconds = max_time_seconds
        self.state = ClockState.IDLE
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._handle: TimerHandle | None = None

    @property
    def is_running(self) -> bool:
        return self.state == ClockState.RUNNING

    def start(self) -> bool:
        """
        Start counting down.

        Only an idle clock starts; returns whether it did.
        """
        if self.state != ClockState.IDLE:
            return False
        self.state = ClockState.RUNNING
        logger.debug("Clock started at %ds", self.time_left_seconds)
        if self.time_left_seconds <= 0:
            self._expire()
        else:
            self._schedule_tick()
        return True

    def stop(self) -> None:
        """Halt the countdown without expiring."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self.state in (ClockState.IDLE, ClockState.RUNNING):
            self.state = ClockState.STOPPED

    def _schedule_tick(self) -> None:
        self._handle = self.scheduler.call_later(TICK_INTERVAL_MS, self._tick)

    def _tick(self) -> None:
        self._handle = None
        if self.state != ClockState.RUNNING:
            return

        self.time_left_seconds -= 1
        if self._on_tick:
            self._on_tick(self.time_left_seconds)

        # on_tick may have stopped us
        if self.state != ClockState.RUNNING:
            return
        if self.time_left_seconds <= 0:
            self._expire()
        else:
            self._schedule_tick()

    def _expire(self) -> None:
        self.state = ClockState.EXPIRED
        logger.debug("Clock expired")
        if self._on_expire:
            self._on_expire()
