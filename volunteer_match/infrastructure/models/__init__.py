"""ORM models used by the application infrastructure."""

from .application import ApplicationModel
from .domain_event import DomainEventModel
from .notification import NotificationModel
from .opportunity import OpportunityModel
from .organization import OrganizationModel
from .user import UserModel

__all__ = [
    "ApplicationModel",
    "DomainEventModel",
    "NotificationModel",
    "OpportunityModel",
    "OrganizationModel",
    "UserModel",
]
