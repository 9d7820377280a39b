"""
Tests for the scheduler and the session clock.
"""

import asyncio

import pytest

from ..engine_core.clock import ClockState, SessionClock
from ..engine_core.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    """Tests for the simulated clock."""

    def test_fires_in_time_order(self, scheduler):
        fired = []
        scheduler.call_later(1200, lambda: fired.append("hide"))
        scheduler.call_later(400, lambda: fired.append("shake"))

        scheduler.advance(399)
        assert fired == []

        scheduler.advance(1)
        assert fired == ["shake"]
        assert scheduler.now_ms == 400

        scheduler.advance(800)
        assert fired == ["shake", "hide"]

    def test_same_deadline_runs_in_scheduling_order(self, scheduler):
        fired = []
        for name in "abc":
            scheduler.call_later(100, lambda n=name: fired.append(n))
        scheduler.advance(100)
        assert fired == ["a", "b", "c"]

    def test_cancelled_timer_does_not_fire(self, scheduler):
        fired = []
        handle = scheduler.call_later(10, lambda: fired.append(1))
        handle.cancel()

        assert scheduler.advance(100) == 0
        assert fired == []
        assert handle.cancelled

    def test_callback_scheduled_during_advance_fires_if_due(self, scheduler):
        """A chain of timers fires within one long advance."""
        fired = []

        def tick():
            fired.append(scheduler.now_ms)
            if len(fired) < 3:
                scheduler.call_later(1000, tick)

        scheduler.call_later(1000, tick)
        scheduler.advance(5000)

        assert fired == [1000, 2000, 3000]
        assert scheduler.now_ms == 5000

    def test_run_all_drains_queue(self, scheduler):
        fired = []
        scheduler.call_later(50, lambda: fired.append(1))
        scheduler.call_later(5000, lambda: fired.append(2))

        assert scheduler.run_all() == 2
        assert scheduler.pending_count == 0
        assert scheduler.now_ms == 5000

    def test_negative_values_rejected(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.call_later(-1, lambda: None)
        with pytest.raises(ValueError):
            scheduler.advance(-5)


class TestAsyncioScheduler:
    """Tests for the real-time scheduler."""

    def test_runs_callback_on_loop(self):
        async def run():
            fired = asyncio.Event()
            AsyncioScheduler().call_later(1, fired.set)
            await asyncio.wait_for(fired.wait(), timeout=1.0)
            return fired.is_set()

        assert asyncio.run(run())

    def test_cancel(self):
        async def run():
            fired = []
            handle = AsyncioScheduler().call_later(1, lambda: fired.append(1))
            handle.cancel()
            await asyncio.sleep(0.02)
            return fired, handle.cancelled

        fired, cancelled = asyncio.run(run())
        assert fired == []
        assert cancelled


class TestSessionClock:
    """Tests for the countdown."""

    def test_idle_until_started(self, scheduler):
        clock = SessionClock(scheduler, max_time_seconds=5)
        scheduler.advance(10_000)

        assert clock.state == ClockState.IDLE
        assert clock.time_left_seconds == 5

    def test_ticks_every_second(self, scheduler):
        ticks = []
        clock = SessionClock(scheduler, max_time_seconds=3, on_tick=ticks.append)
        clock.start()

        scheduler.advance(999)
        assert ticks == []
        scheduler.advance(1)
        assert ticks == [2]
        scheduler.advance(1000)
        assert ticks == [2, 1]

    def test_expires_at_zero(self, scheduler):
        ticks, expired = [], []
        clock = SessionClock(
            scheduler,
            max_time_seconds=2,
            on_tick=ticks.append,
            on_expire=lambda: expired.append(scheduler.now_ms),
        )
        clock.start()
        scheduler.advance(10_000)

        assert ticks == [1, 0]
        assert expired == [2000]
        assert clock.state == ClockState.EXPIRED
        assert scheduler.pending_count == 0

    def test_stop_halts_ticks(self, scheduler):
        ticks = []
        clock = SessionClock(scheduler, max_time_seconds=10, on_tick=ticks.append)
        clock.start()
        scheduler.advance(2000)
        clock.stop()
        scheduler.advance(5000)

        assert ticks == [9, 8]
        assert clock.state == ClockState.STOPPED

    def test_start_only_once(self, scheduler):
        clock = SessionClock(scheduler, max_time_seconds=10)
        assert clock.start()
        assert not clock.start()
        assert scheduler.pending_count == 1
