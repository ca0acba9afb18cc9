from .application import (
    ApplicationCreate,
    ApplicationRead,
    DecisionRequest,
    DecisionResponse,
    WithdrawalResponse,
)
from .dashboard import (
    HistoryEntryRead,
    OrganizationDashboardRead,
    RosterEntryRead,
    RosterRead,
    VolunteerDashboardRead,
)
from .notification import MarkReadResponse, NotificationRead, UnreadCountResponse
from .opportunity import CapacityUpdate, OpportunityCreate, OpportunityRead

__all__ = [
    "ApplicationCreate",
    "ApplicationRead",
    "CapacityUpdate",
    "DecisionRequest",
    "DecisionResponse",
    "HistoryEntryRead",
    "MarkReadResponse",
    "NotificationRead",
    "OpportunityCreate",
    "OpportunityRead",
    "OrganizationDashboardRead",
    "RosterEntryRead",
    "RosterRead",
    "UnreadCountResponse",
    "VolunteerDashboardRead",
    "WithdrawalResponse",
]
