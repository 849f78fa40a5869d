from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from ..attendance.classifier import AttendanceClassifier
from ..common.datetime_utils import end_of_month, end_of_week, now_local, start_of_month, start_of_week
from ..core.constants import DEFAULT_WEEK_START
from ..sessions.model import WorkSession
from .model import DayAggregate, PeriodSummary, PeriodTotal


@dataclass(frozen=True)
class DurationAggregator:
    """Sum session durations per day and over the current day/week/month/year.

    Open sessions are measured up to `now`, so results are only valid as of
    that instant.
    """

    classifier: AttendanceClassifier = field(default_factory=AttendanceClassifier)
    week_start: int = DEFAULT_WEEK_START

    def day_totals(self, sessions: Iterable[WorkSession], *, now: Optional[datetime] = None) -> dict[date, int]:
        now = now or now_local()
        totals: dict[date, int] = defaultdict(int)
        for s in sessions:
            totals[s.day_key] += s.duration_minutes(now)
        return dict(totals)

    def day_aggregates(self, sessions: Iterable[WorkSession], *, now: Optional[datetime] = None) -> list[DayAggregate]:
        totals = self.day_totals(sessions, now=now)
        return [self.aggregate_for(day, totals.get(day, 0)) for day in sorted(totals)]

    def aggregate_for(self, day: date, total_minutes: int) -> DayAggregate:
        return DayAggregate(date=day, total_minutes=total_minutes, status=self.classifier.classify(total_minutes))

    def total_between(
        self,
        sessions: Iterable[WorkSession],
        start: date,
        end: date,
        *,
        now: Optional[datetime] = None,
    ) -> int:
        totals = self.day_totals(sessions, now=now)
        return self._sum_window(totals, start, end)

    def summarize(self, sessions: Iterable[WorkSession], *, now: Optional[datetime] = None) -> PeriodSummary:
        now = now or now_local()
        today = now.date()
        totals = self.day_totals(sessions, now=now)

        return PeriodSummary(
            today=PeriodTotal(totals.get(today, 0)),
            this_week=PeriodTotal(
                self._sum_window(
                    totals,
                    start_of_week(today, week_start=self.week_start),
                    end_of_week(today, week_start=self.week_start),
                )
            ),
            this_month=PeriodTotal(self._sum_window(totals, start_of_month(today), end_of_month(today))),
            this_year=PeriodTotal(self._sum_window(totals, date(today.year, 1, 1), date(today.year, 12, 31))),
        )

    @staticmethod
    def _sum_window(totals: dict[date, int], start: date, end: date) -> int:
        return sum(minutes for day, minutes in totals.items() if start <= day <= end)
