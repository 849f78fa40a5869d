from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.time_tracking.time_tracking.core.enums import ClockEventType
from src.time_tracking.time_tracking.core.exceptions import ValidationError
from src.time_tracking.time_tracking.events.model import ClockEvent
from src.time_tracking.time_tracking.events.series import EventSeries


def test_series_sorted_by_timestamp_not_by_id(make_events, fixed_now):
    events = make_events(
        ("OUT", datetime(2026, 2, 4, 12, 0)),
        ("IN", datetime(2026, 2, 4, 9, 0)),
        ("IN", datetime(2026, 2, 4, 13, 0)),
    )
    original = list(events)

    series = EventSeries.build(events, now=fixed_now)

    assert [e.event_id for e in series] == [2, 1, 3]
    assert events == original


def test_equal_timestamps_ordered_by_event_id(make_events, fixed_now):
    ts = datetime(2026, 2, 4, 9, 0)
    # newest first, as the events endpoint returns them
    events = list(reversed(make_events(("IN", ts), ("OUT", ts))))

    series = EventSeries.build(events, now=fixed_now)

    assert [e.type for e in series] == [ClockEventType.IN, ClockEventType.OUT]
    assert [e.event_id for e in series] == [1, 2]


def test_future_events_flagged_but_kept(make_events, fixed_now):
    events = make_events(
        ("IN", fixed_now - timedelta(hours=1)),
        ("OUT", fixed_now + timedelta(minutes=30)),
    )

    series = EventSeries.build(events, now=fixed_now)

    assert len(series) == 2
    assert [e.event_id for e in series.flagged] == [2]


def test_small_skew_is_not_flagged(make_events, fixed_now):
    events = make_events(("IN", fixed_now + timedelta(seconds=60)))

    series = EventSeries.build(events, now=fixed_now)

    assert series.flagged == ()


def test_reject_future_drops_flagged_events(make_events, fixed_now):
    events = make_events(
        ("IN", fixed_now - timedelta(hours=1)),
        ("OUT", fixed_now + timedelta(hours=2)),
    )

    series = EventSeries.build(events, now=fixed_now, reject_future=True)

    assert [e.event_id for e in series] == [1]
    assert len(series.flagged) == 1


def test_events_of_another_user_rejected(make_events, fixed_now):
    events = make_events(("IN", fixed_now), user_id=2)

    with pytest.raises(ValidationError):
        EventSeries.build(events, user_id=1, now=fixed_now)


def test_empty_series(fixed_now):
    series = EventSeries.build([], now=fixed_now)

    assert len(series) == 0
    assert series.last is None


def test_on_day_keeps_only_that_date(make_events, fixed_now):
    events = make_events(
        ("IN", datetime(2026, 2, 3, 9, 0)),
        ("OUT", datetime(2026, 2, 3, 17, 0)),
        ("IN", datetime(2026, 2, 4, 9, 0)),
    )

    series = EventSeries.build(events, now=fixed_now)

    assert [e.event_id for e in series.on_day(fixed_now.date())] == [3]
    assert [e.event_id for e in series.between(date(2026, 2, 1), date(2026, 2, 3))] == [1, 2]


def test_payload_timestamps_become_local_wall_clock():
    event = ClockEvent.from_payload(
        {"id": 7, "userId": 3, "type": "IN", "timestamp": "2026-02-04T09:00:00Z", "createdAt": None}
    )

    expected = datetime(2026, 2, 4, 9, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert event.timestamp == expected
    assert event.timestamp.tzinfo is None
    assert event.type == ClockEventType.IN
    assert event.to_payload()["userId"] == 3
