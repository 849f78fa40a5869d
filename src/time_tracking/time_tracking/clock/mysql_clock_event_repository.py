from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ClockEventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..events.model import ClockEvent
from .repository import ClockEventRepository

_COLUMNS = "event_id, user_id, event_type, event_time, created_at"


class MySQLClockEventRepository(ClockEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: int) -> Sequence[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_events
                WHERE user_id=%s
                ORDER BY event_time DESC, event_id DESC
                """,
                (user_id,),
            )
            return [self._to_event(r) for r in fetchall(cur)]

    def list_for_user_and_day(self, user_id: int, day: date) -> Sequence[ClockEvent]:
        start = datetime.combine(day, time.min)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_events
                WHERE user_id=%s AND event_time >= %s AND event_time < %s
                ORDER BY event_time ASC, event_id ASC
                """,
                (user_id, start, start + timedelta(days=1)),
            )
            return [self._to_event(r) for r in fetchall(cur)]

    def get_latest_for_user(self, user_id: int) -> Optional[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_events
                WHERE user_id=%s
                ORDER BY event_time DESC, event_id DESC
                LIMIT 1
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return self._to_event(r) if r else None

    def create(self, *, user_id: int, event_type: ClockEventType, timestamp: datetime) -> ClockEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO clock_events(user_id, event_type, event_time)
                VALUES(%s,%s,%s)
                """,
                (user_id, event_type.value, timestamp),
            )
            event_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM clock_events WHERE event_id=%s", (event_id,))
            return self._to_event(fetchone(cur))

    @staticmethod
    def _to_event(r: Dict[str, Any]) -> ClockEvent:
        return ClockEvent(
            event_id=int(r["event_id"]),
            user_id=int(r["user_id"]),
            type=ClockEventType(r["event_type"]),
            timestamp=r["event_time"],
            created_at=r.get("created_at"),
        )
