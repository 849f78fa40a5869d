from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Union


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_local(value: datetime) -> datetime:
    """Return a naive local wall-clock datetime.

    Aware values are converted to the host timezone; naive values are assumed to
    be local already.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 instant (``Z`` suffix accepted) into local time."""
    if isinstance(value, datetime):
        return to_local(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local(datetime.fromisoformat(text))


def whole_minutes(start: datetime, end: datetime) -> int:
    """Minutes from start to end, truncated, never negative."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)


def start_of_week(day: date, *, week_start: int = 0) -> date:
    offset = (day.weekday() - week_start) % 7
    return day - timedelta(days=offset)


def end_of_week(day: date, *, week_start: int = 0) -> date:
    return start_of_week(day, week_start=week_start) + timedelta(days=6)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last)


def add_months(day: date, months: int) -> date:
    """Shift to the same day-of-month `months` later, clamped to the month length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    last = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(day.day, last))


def each_day(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
