from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from ..aggregation.aggregator import DurationAggregator
from ..common.datetime_utils import each_day, end_of_month, end_of_week, now_local, start_of_month, start_of_week
from ..common.formatters import minutes_to_hours
from ..core.enums import AnalyticsPeriod
from ..sessions.model import WorkSession


@dataclass(frozen=True)
class Bucket:
    """One day of a chart series."""

    date: date
    label: str
    minutes: int

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.minutes)

    def to_dict(self) -> dict:
        return {
            "date": self.label,
            "fullDate": self.date.isoformat(),
            "minutes": self.minutes,
            "hours": self.hours,
        }


@dataclass(frozen=True)
class AnalyticsBucketizer:
    """Zero-filled per-day totals over a week or a month."""

    aggregator: DurationAggregator = field(default_factory=DurationAggregator)

    def interval(self, period: AnalyticsPeriod, anchor: date) -> tuple[date, date]:
        if period == AnalyticsPeriod.WEEK:
            week_start = self.aggregator.week_start
            return start_of_week(anchor, week_start=week_start), end_of_week(anchor, week_start=week_start)
        return start_of_month(anchor), end_of_month(anchor)

    def bucketize(
        self,
        sessions: Iterable[WorkSession],
        period: AnalyticsPeriod,
        *,
        now: Optional[datetime] = None,
        anchor: Optional[date] = None,
    ) -> list[Bucket]:
        now = now or now_local()
        start, end = self.interval(period, anchor or now.date())
        totals = self.aggregator.day_totals(sessions, now=now)
        label_format = "%a" if period == AnalyticsPeriod.WEEK else "%d"

        return [
            Bucket(date=day, label=day.strftime(label_format), minutes=totals.get(day, 0))
            for day in each_day(start, end)
        ]
