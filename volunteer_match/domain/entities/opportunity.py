"""Domain entity representing a capacity-limited volunteering opportunity."""

from dataclasses import dataclass, field
from datetime import date, datetime

OPPORTUNITY_STATUS_ACTIVE = "active"
OPPORTUNITY_STATUS_FULL = "full"
OPPORTUNITY_STATUS_CLOSED = "closed"

OPPORTUNITY_STATUSES = (
    OPPORTUNITY_STATUS_ACTIVE,
    OPPORTUNITY_STATUS_FULL,
    OPPORTUNITY_STATUS_CLOSED,
)


@dataclass
class Opportunity:
    """Engagement posted by an organization with a bounded number of slots."""

    id: int | None
    organization_id: int
    title: str
    description: str
    location: str
    category: str
    max_participants: int
    current_participants: int = 0
    status: str = OPPORTUNITY_STATUS_ACTIVE
    event_date: date | None = None
    duration: str | None = None
    required_skills: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def open_slots(self) -> int:
        return max(self.max_participants - self.current_participants, 0)

    def is_accepting_applications(self) -> bool:
        """Return ``True`` when volunteers may still apply."""

        return self.status == OPPORTUNITY_STATUS_ACTIVE


__all__ = [
    "Opportunity",
    "OPPORTUNITY_STATUS_ACTIVE",
    "OPPORTUNITY_STATUS_FULL",
    "OPPORTUNITY_STATUS_CLOSED",
    "OPPORTUNITY_STATUSES",
]
