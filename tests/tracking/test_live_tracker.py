from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytest

from src.time_tracking.time_tracking.core.enums import TrackerState
from src.time_tracking.time_tracking.core.exceptions import ValidationError
from src.time_tracking.time_tracking.tracking.live_tracker import LiveElapsedTracker


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_elapsed_display_for_open_session(fixed_now):
    tracker = LiveElapsedTracker(clock=FakeClock(fixed_now))

    tracker.clock_in(datetime(2026, 2, 4, 9, 0))

    assert tracker.state == TrackerState.ACTIVE
    assert tracker.display() == "02:15:00"
    assert tracker.elapsed() == timedelta(hours=2, minutes=15)


def test_inactive_tracker_shows_zero(fixed_now):
    tracker = LiveElapsedTracker(clock=FakeClock(fixed_now))

    assert tracker.state == TrackerState.INACTIVE
    assert tracker.display() == "00:00:00"


def test_anchor_in_the_future_is_clamped(fixed_now):
    tracker = LiveElapsedTracker(clock=FakeClock(fixed_now))

    tracker.clock_in(fixed_now + timedelta(seconds=30))

    assert tracker.display() == "00:00:00"


def test_clock_out_returns_to_inactive(fixed_now):
    tracker = LiveElapsedTracker(clock=FakeClock(fixed_now))
    tracker.clock_in(datetime(2026, 2, 4, 9, 0))
    tracker.start_break()

    tracker.clock_out()

    assert tracker.state == TrackerState.INACTIVE
    assert tracker.anchor is None
    # the machine cycles: a new session can start again
    tracker.clock_in(datetime(2026, 2, 4, 11, 0))
    assert tracker.state == TrackerState.ACTIVE


def test_break_is_display_only(fixed_now):
    clock = FakeClock(fixed_now)
    tracker = LiveElapsedTracker(clock=clock)
    tracker.clock_in(datetime(2026, 2, 4, 9, 0))

    assert tracker.toggle_break() == TrackerState.ON_BREAK
    clock.now = fixed_now + timedelta(minutes=20)

    assert tracker.display() == "02:35:00"
    assert tracker.toggle_break() == TrackerState.ACTIVE


def test_invalid_transitions_raise(fixed_now):
    tracker = LiveElapsedTracker(clock=FakeClock(fixed_now))

    with pytest.raises(ValidationError):
        tracker.clock_out()
    with pytest.raises(ValidationError):
        tracker.start_break()

    tracker.clock_in(fixed_now)
    with pytest.raises(ValidationError):
        tracker.clock_in(fixed_now)
    with pytest.raises(ValidationError):
        tracker.end_break()


def test_resume_without_anchor_stays_at_zero(fixed_now):
    tracker = LiveElapsedTracker(clock=FakeClock(fixed_now))

    tracker.resume(None)

    assert tracker.state == TrackerState.ACTIVE
    assert tracker.display() == "00:00:00"


def test_no_tick_without_attached_view(fixed_now):
    tracker = LiveElapsedTracker(clock=FakeClock(fixed_now))

    tracker.clock_in(fixed_now)

    assert not tracker.is_ticking


def test_tick_runs_while_active_and_stops_on_clock_out(fixed_now):
    clock = FakeClock(fixed_now)
    ticks: list[str] = []

    async def scenario():
        tracker = LiveElapsedTracker(clock=clock, tick_seconds=0.01, on_tick=ticks.append)
        tracker.attach_view()
        tracker.clock_in(datetime(2026, 2, 4, 9, 0))
        assert tracker.is_ticking

        await asyncio.sleep(0.05)
        clock.now = fixed_now + timedelta(seconds=1)
        await asyncio.sleep(0.05)

        tracker.clock_out()
        assert not tracker.is_ticking
        count = len(ticks)
        await asyncio.sleep(0.05)
        return count

    count = asyncio.run(scenario())

    assert count == len(ticks)
    assert ticks[0] == "02:15:00"
    assert "02:15:01" in ticks


def test_detaching_view_cancels_tick(fixed_now):
    async def scenario():
        tracker = LiveElapsedTracker(clock=FakeClock(fixed_now), tick_seconds=0.01)
        tracker.attach_view()
        tracker.clock_in(fixed_now)
        task = tracker._task

        await tracker.close()

        assert task.cancelled()
        assert not tracker.is_ticking
        assert tracker.state == TrackerState.ACTIVE
        assert tracker.last_display == "00:00:00"

    asyncio.run(scenario())


def test_failing_tick_callback_is_logged_and_ticking_continues(fixed_now, caplog):
    ticks: list[str] = []

    def on_tick(display: str) -> None:
        ticks.append(display)
        if len(ticks) == 1:
            raise RuntimeError("view gone")

    async def scenario():
        tracker = LiveElapsedTracker(clock=FakeClock(fixed_now), tick_seconds=0.01, on_tick=on_tick)
        tracker.attach_view()
        tracker.clock_in(datetime(2026, 2, 4, 9, 0))
        await asyncio.sleep(0.05)
        ticking = tracker.is_ticking
        await tracker.close()
        return ticking

    with caplog.at_level("ERROR"):
        ticking = asyncio.run(scenario())

    assert ticking
    assert len(ticks) > 1
    assert "tick callback failed" in caplog.text
