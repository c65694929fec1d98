"""Unit tests for core/scheduler.py and core/clock.py."""

from __future__ import annotations

import time
from datetime import datetime

import pytest

from focustimer_cli.core.clock import SystemClock, to_datetime
from focustimer_cli.core.scheduler import LoopScheduler


class TestLoopScheduler:
    def test_nothing_fires_before_due(self, scheduler, clock):
        calls = []
        scheduler.schedule(10, lambda: calls.append(1))
        clock.advance(9)
        assert scheduler.run_pending() == 0
        assert calls == []

    def test_fires_once_per_period(self, scheduler, clock):
        calls = []
        scheduler.schedule(10, lambda: calls.append(clock.now_ms()))
        for _ in range(3):
            clock.advance(10)
            scheduler.run_pending()
        assert len(calls) == 3

    def test_late_job_fires_once_without_replay(self, scheduler, clock):
        calls = []
        scheduler.schedule(10, lambda: calls.append(1))
        clock.advance(1_000)
        assert scheduler.run_pending() == 1
        assert scheduler.run_pending() == 0
        assert scheduler.ms_until_next() == 10

    def test_cancel_stops_job(self, scheduler, clock):
        calls = []
        handle = scheduler.schedule(10, lambda: calls.append(1))
        scheduler.cancel(handle)
        clock.advance(100)
        scheduler.run_pending()
        assert calls == []
        assert scheduler.active == 0

    def test_cancel_unknown_handle_is_ignored(self, scheduler):
        scheduler.cancel(12345)
        assert scheduler.active == 0

    def test_handles_are_unique(self, scheduler):
        handles = {scheduler.schedule(10, lambda: None) for _ in range(5)}
        assert len(handles) == 5
        assert scheduler.active == 5

    def test_callback_may_cancel_a_later_job(self, scheduler, clock):
        calls = []
        later: list[int] = []

        def first():
            calls.append("first")
            scheduler.cancel(later[0])

        scheduler.schedule(10, first)
        later.append(scheduler.schedule(10, lambda: calls.append("second")))
        clock.advance(10)
        scheduler.run_pending()
        assert calls == ["first"]

    def test_callback_may_reschedule(self, scheduler, clock):
        handles: list[int] = []

        def restart():
            scheduler.cancel(handles[-1])
            handles.append(scheduler.schedule(10, restart))

        handles.append(scheduler.schedule(10, restart))
        clock.advance(10)
        assert scheduler.run_pending() == 1
        assert scheduler.active == 1

    @pytest.mark.parametrize("period", [0, -1])
    def test_rejects_non_positive_period(self, scheduler, period):
        with pytest.raises(ValueError):
            scheduler.schedule(period, lambda: None)

    def test_ms_until_next_when_idle(self, scheduler):
        assert scheduler.ms_until_next() is None

    def test_ms_until_next(self, scheduler, clock):
        scheduler.schedule(50, lambda: None)
        clock.advance(20)
        assert scheduler.ms_until_next() == 30


class TestClock:
    def test_system_clock_reads_wall_time(self):
        before = int(time.time() * 1000)
        now = SystemClock().now_ms()
        after = int(time.time() * 1000)
        assert before <= now <= after

    def test_to_datetime_is_aware(self):
        value = to_datetime(1_772_355_600_000)
        assert isinstance(value, datetime)
        assert value.tzinfo is not None
        assert value.timestamp() == 1_772_355_600
