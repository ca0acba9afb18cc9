"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Message materialized for one recipient from one domain event."""

    id: int | None
    recipient_id: int
    event_id: int
    kind: str
    message: str
    link_to: str | None = None
    is_read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification"]
