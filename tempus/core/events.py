"""
Canonical Event Schema for Tempus.

All events must contain:
- event_id (uuid)
- event_type (string enum)
- timestamp (UTC ISO8601)
- payload (dict)

Schedule construction, fires and callback failures are recorded as events.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """All event types in Tempus."""

    # Schedule lifecycle
    SCHEDULE_CREATED = "SCHEDULE_CREATED"

    # Firing
    SCHEDULED_EVENT_ERROR = "SCHEDULED_EVENT_ERROR"


class Event(BaseModel):
    """
    Immutable event record.

    Events are the audit trail for what the scheduling layer produced
    and which callbacks failed.
    """

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    payload: dict[str, Any] = Field(default_factory=dict)

    # Optional metadata
    event_name: str | None = None
    symbol: str | None = None

    model_config = {"frozen": True}

    def to_jsonl_dict(self) -> dict[str, Any]:
        """Convert to dict suitable for JSONL serialization."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload,
            "event_name": self.event_name,
            "symbol": self.symbol,
        }

    @classmethod
    def from_jsonl_dict(cls, data: dict[str, Any]) -> Event:
        """Reconstruct event from JSONL dict."""
        return cls(
            event_id=data["event_id"],
            event_type=EventType(data["event_type"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            payload=data.get("payload", {}),
            event_name=data.get("event_name"),
            symbol=data.get("symbol"),
        )


def create_event(
    event_type: EventType,
    payload: dict[str, Any] | None = None,
    *,
    event_name: str | None = None,
    symbol: str | None = None,
    timestamp: datetime | None = None,
) -> Event:
    """Factory function to create events with consistent defaults."""
    return Event(
        event_type=event_type,
        payload=payload or {},
        event_name=event_name,
        symbol=symbol,
        timestamp=timestamp or datetime.now(timezone.utc),
    )
