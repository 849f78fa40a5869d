from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_timestamp
from ..core.enums import ClockEventType


@dataclass(frozen=True)
class ClockEvent:
    """Domain entity: one atomic IN/OUT record of a user.

    Created only by the clock mutation endpoint, never modified afterwards.
    """

    event_id: int
    user_id: int
    type: ClockEventType
    timestamp: datetime
    created_at: Optional[datetime] = None

    @property
    def is_in(self) -> bool:
        return self.type == ClockEventType.IN

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ClockEvent":
        """Build from the API's JSON shape (camelCase keys, ISO timestamps)."""
        created_at = payload.get("createdAt")
        return cls(
            event_id=int(payload["id"]),
            user_id=int(payload["userId"]),
            type=ClockEventType(payload["type"]),
            timestamp=parse_timestamp(payload["timestamp"]),
            created_at=parse_timestamp(created_at) if created_at else None,
        )

    def to_payload(self) -> dict:
        return {
            "id": self.event_id,
            "userId": self.user_id,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
