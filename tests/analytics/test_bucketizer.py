from __future__ import annotations

from datetime import date, datetime

from src.time_tracking.time_tracking.aggregation.aggregator import DurationAggregator
from src.time_tracking.time_tracking.analytics.bucketizer import AnalyticsBucketizer
from src.time_tracking.time_tracking.core.enums import AnalyticsPeriod
from src.time_tracking.time_tracking.sessions.model import WorkSession


def test_week_is_zero_filled_to_seven_days(fixed_now):
    buckets = AnalyticsBucketizer().bucketize([], AnalyticsPeriod.WEEK, now=fixed_now)

    assert len(buckets) == 7
    assert all(b.minutes == 0 for b in buckets)
    assert [b.label for b in buckets] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert buckets[0].date == date(2026, 2, 2)
    assert buckets[-1].date == date(2026, 2, 8)


def test_week_places_minutes_on_their_day(fixed_now):
    sessions = [
        WorkSession(datetime(2026, 2, 3, 9, 0), datetime(2026, 2, 3, 10, 30)),
        WorkSession(datetime(2026, 2, 3, 11, 0), datetime(2026, 2, 3, 11, 30)),
        WorkSession(datetime(2026, 1, 20, 9, 0), datetime(2026, 1, 20, 17, 0)),
    ]

    buckets = AnalyticsBucketizer().bucketize(sessions, AnalyticsPeriod.WEEK, now=fixed_now)

    assert len(buckets) == 7
    assert [b.minutes for b in buckets] == [0, 120, 0, 0, 0, 0, 0]
    assert buckets[1].hours == 2.0


def test_week_includes_open_session_of_today(fixed_now):
    sessions = [WorkSession(datetime(2026, 2, 4, 9, 0))]

    buckets = AnalyticsBucketizer().bucketize(sessions, AnalyticsPeriod.WEEK, now=fixed_now)

    assert buckets[2].date == fixed_now.date()
    assert buckets[2].minutes == 135


def test_sunday_week_start_shifts_window(fixed_now):
    bucketizer = AnalyticsBucketizer(DurationAggregator(week_start=6))

    buckets = bucketizer.bucketize([], AnalyticsPeriod.WEEK, now=fixed_now)

    assert buckets[0].date == date(2026, 2, 1)
    assert buckets[0].label == "Sun"


def test_month_covers_every_day_in_order(fixed_now):
    sessions = [WorkSession(datetime(2026, 2, 28, 8, 0), datetime(2026, 2, 28, 9, 0))]

    buckets = AnalyticsBucketizer().bucketize(sessions, AnalyticsPeriod.MONTH, now=fixed_now)

    assert len(buckets) == 28
    assert [b.date.day for b in buckets] == list(range(1, 29))
    assert buckets[0].label == "01"
    assert buckets[-1].minutes == 60


def test_anchor_selects_another_month(fixed_now):
    buckets = AnalyticsBucketizer().bucketize([], AnalyticsPeriod.MONTH, now=fixed_now, anchor=date(2026, 3, 15))

    assert len(buckets) == 31
    assert buckets[0].date == date(2026, 3, 1)
