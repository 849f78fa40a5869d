from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_event_type
from ..core.enums import ClockEventType
from ..core.exceptions import ValidationError
from ..events.model import ClockEvent
from .repository import ClockEventRepository

logger = logging.getLogger(__name__)


class ClockService:
    """Server-side clock mutations and event reads for one authenticated user."""

    def __init__(self, events: ClockEventRepository):
        self._events = events

    def current_status(self, user_id: int) -> ClockEventType:
        latest = self._events.get_latest_for_user(user_id)
        return latest.type if latest else ClockEventType.OUT

    def clock(self, user_id: int, event_type: Any, *, now: Optional[datetime] = None) -> ClockEvent:
        event_type = require_event_type(event_type)
        now = now or now_local()

        if self.current_status(user_id) == event_type:
            word = "in" if event_type == ClockEventType.IN else "out"
            raise ValidationError(f"You are already clocked {word}")

        event = self._events.create(user_id=user_id, event_type=event_type, timestamp=now)
        logger.info("user %s clocked %s (event id=%s)", user_id, event_type.value, event.event_id)
        return event

    def events(self, user_id: int) -> Sequence[ClockEvent]:
        return self._events.list_for_user(user_id)

    def day_events(self, user_id: int, day: Optional[date] = None) -> Sequence[ClockEvent]:
        return self._events.list_for_user_and_day(user_id, day or now_local().date())
