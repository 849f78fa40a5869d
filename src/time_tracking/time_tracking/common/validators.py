from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.enums import AnalyticsPeriod, ClockEventType, HistoryRange
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_month


def require_event_type(value: Any) -> ClockEventType:
    text = str(value or "").strip().upper()
    try:
        return ClockEventType(text)
    except ValueError:
        raise ValidationError("Invalid clock event type. Must be 'IN' or 'OUT'") from None


def optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format, expected YYYY-MM-DD") from None


def optional_month(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_month(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format, expected YYYY-MM") from None


def require_period(value: Optional[str]) -> AnalyticsPeriod:
    try:
        return AnalyticsPeriod((value or AnalyticsPeriod.WEEK.value).strip().lower())
    except ValueError:
        raise ValidationError("Invalid period. Must be 'week' or 'month'") from None


def require_history_range(value: Optional[str]) -> HistoryRange:
    try:
        return HistoryRange((value or HistoryRange.TODAY.value).strip().lower())
    except ValueError:
        raise ValidationError("Invalid range. Must be one of: today, yesterday, week, all") from None
