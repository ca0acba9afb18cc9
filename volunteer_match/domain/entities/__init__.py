"""Domain entities exposed by the application."""

from .application import (
    APPLICATION_STATUS_APPROVED,
    APPLICATION_STATUS_PENDING,
    APPLICATION_STATUS_REJECTED,
    APPLICATION_STATUS_WITHDRAWN,
    APPLICATION_TRANSITIONS,
    DECISION_APPROVE,
    DECISION_REJECT,
    Application,
    decision_status,
    ensure_transition,
    is_valid_transition,
)
from .dashboard import (
    HistoryEntry,
    OpportunityRoster,
    OrganizationDashboard,
    RosterEntry,
    VolunteerDashboard,
)
from .domain_event import (
    EVENT_APPLICATION_DECIDED,
    EVENT_APPLICATION_SUBMITTED,
    EVENT_APPLICATION_WITHDRAWN,
    DomainEvent,
)
from .notification import Notification
from .opportunity import (
    OPPORTUNITY_STATUS_ACTIVE,
    OPPORTUNITY_STATUS_CLOSED,
    OPPORTUNITY_STATUS_FULL,
    OPPORTUNITY_STATUSES,
    Opportunity,
)
from .user import (
    ROLE_ORGANIZATION,
    ROLE_VOLUNTEER,
    Organization,
    OrganizationView,
    User,
    VolunteerView,
)

__all__ = [
    "Application",
    "APPLICATION_STATUS_PENDING",
    "APPLICATION_STATUS_APPROVED",
    "APPLICATION_STATUS_REJECTED",
    "APPLICATION_STATUS_WITHDRAWN",
    "APPLICATION_TRANSITIONS",
    "DECISION_APPROVE",
    "DECISION_REJECT",
    "decision_status",
    "ensure_transition",
    "is_valid_transition",
    "HistoryEntry",
    "OpportunityRoster",
    "OrganizationDashboard",
    "RosterEntry",
    "VolunteerDashboard",
    "DomainEvent",
    "EVENT_APPLICATION_SUBMITTED",
    "EVENT_APPLICATION_DECIDED",
    "EVENT_APPLICATION_WITHDRAWN",
    "Notification",
    "Opportunity",
    "OPPORTUNITY_STATUS_ACTIVE",
    "OPPORTUNITY_STATUS_FULL",
    "OPPORTUNITY_STATUS_CLOSED",
    "OPPORTUNITY_STATUSES",
    "Organization",
    "OrganizationView",
    "ROLE_ORGANIZATION",
    "ROLE_VOLUNTEER",
    "User",
    "VolunteerView",
]
