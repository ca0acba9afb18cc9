"""Domain events emitted after committed lifecycle transitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

EVENT_APPLICATION_SUBMITTED = "ApplicationSubmitted"
EVENT_APPLICATION_DECIDED = "ApplicationDecided"
EVENT_APPLICATION_WITHDRAWN = "ApplicationWithdrawn"


@dataclass(frozen=True)
class DomainEvent:
    """Immutable record of a committed state change."""

    id: int | None
    kind: str
    actor_id: int
    application_id: int
    opportunity_id: int
    volunteer_id: int
    status: str
    occurred_at: datetime | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    dispatched_at: datetime | None = None


__all__ = [
    "DomainEvent",
    "EVENT_APPLICATION_SUBMITTED",
    "EVENT_APPLICATION_DECIDED",
    "EVENT_APPLICATION_WITHDRAWN",
]
