from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional

from ..aggregation.aggregator import DurationAggregator
from ..aggregation.model import DayAggregate, PeriodSummary
from ..analytics.bucketizer import AnalyticsBucketizer, Bucket
from ..attendance.calendar import AttendanceCalendar, CalendarMonth
from ..attendance.classifier import AttendanceClassifier
from ..attendance.policy import AttendancePolicy
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_WEEK_START, FUTURE_SKEW_TOLERANCE_SECONDS
from ..core.enums import AnalyticsPeriod, HistoryRange
from ..events.history import ClockHistory, HistoryDay
from ..events.model import ClockEvent
from ..events.series import EventSeries
from ..sessions.model import WorkSession
from ..sessions.reconstructor import SessionReconstructor


@dataclass(frozen=True)
class TimesheetPipeline:
    """Read-only facade: events in, derived views out.

    Every method takes one snapshot of a user's events and the instant to
    evaluate at. Nothing is cached between calls.
    """

    aggregator: DurationAggregator = field(default_factory=DurationAggregator)
    reconstructor: SessionReconstructor = field(default_factory=SessionReconstructor)
    skew_tolerance: timedelta = timedelta(seconds=FUTURE_SKEW_TOLERANCE_SECONDS)

    @classmethod
    def from_settings(cls, settings: Any) -> "TimesheetPipeline":
        classifier = AttendanceClassifier(AttendancePolicy.from_settings(settings))
        return cls(
            aggregator=DurationAggregator(
                classifier=classifier,
                week_start=int(getattr(settings, "WEEK_START", DEFAULT_WEEK_START)),
            ),
            skew_tolerance=timedelta(
                seconds=int(getattr(settings, "FUTURE_SKEW_TOLERANCE_SECONDS", FUTURE_SKEW_TOLERANCE_SECONDS))
            ),
        )

    @property
    def classifier(self) -> AttendanceClassifier:
        return self.aggregator.classifier

    @property
    def bucketizer(self) -> AnalyticsBucketizer:
        return AnalyticsBucketizer(self.aggregator)

    @property
    def calendar(self) -> AttendanceCalendar:
        return AttendanceCalendar(self.aggregator)

    @property
    def history(self) -> ClockHistory:
        return ClockHistory(week_start=self.aggregator.week_start)

    def series(self, events: Iterable[ClockEvent], *, now: datetime, user_id: Optional[int] = None) -> EventSeries:
        return EventSeries.build(events, user_id=user_id, now=now, skew_tolerance=self.skew_tolerance)

    def sessions(self, events: Iterable[ClockEvent], *, now: Optional[datetime] = None) -> list[WorkSession]:
        return self.reconstructor.reconstruct(self.series(events, now=now or now_local()))

    def open_session(self, events: Iterable[ClockEvent], *, now: Optional[datetime] = None) -> Optional[WorkSession]:
        return self.reconstructor.open_session(self.series(events, now=now or now_local()))

    def summary(self, events: Iterable[ClockEvent], *, now: Optional[datetime] = None) -> PeriodSummary:
        now = now or now_local()
        return self.aggregator.summarize(self.sessions(events, now=now), now=now)

    def day_aggregates(self, events: Iterable[ClockEvent], *, now: Optional[datetime] = None) -> list[DayAggregate]:
        now = now or now_local()
        return self.aggregator.day_aggregates(self.sessions(events, now=now), now=now)

    def analytics(
        self,
        events: Iterable[ClockEvent],
        period: AnalyticsPeriod = AnalyticsPeriod.WEEK,
        *,
        now: Optional[datetime] = None,
        anchor: Optional[date] = None,
    ) -> list[Bucket]:
        now = now or now_local()
        return self.bucketizer.bucketize(self.sessions(events, now=now), period, now=now, anchor=anchor)

    def attendance_calendar(
        self,
        events: Iterable[ClockEvent],
        *,
        month: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> CalendarMonth:
        now = now or now_local()
        series = self.series(events, now=now)
        sessions = self.reconstructor.reconstruct(series)
        return self.calendar.month(sessions, series.events, month=month, now=now)

    def clock_history(
        self,
        events: Iterable[ClockEvent],
        history_range: HistoryRange = HistoryRange.TODAY,
        *,
        now: Optional[datetime] = None,
    ) -> list[HistoryDay]:
        now = now or now_local()
        return self.history.group(self.series(events, now=now), history_range, now=now)
