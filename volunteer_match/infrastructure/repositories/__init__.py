"""Repository implementations for infrastructure layer."""

from .application_repository import ApplicationRepository
from .capacity_ledger import CapacityLedger, SlotReservation
from .event_repository import EventRepository
from .notification_repository import NotificationRepository
from .opportunity_repository import OpportunityRepository
from .user_repository import OrganizationRepository, UserRepository

__all__ = [
    "ApplicationRepository",
    "CapacityLedger",
    "SlotReservation",
    "EventRepository",
    "NotificationRepository",
    "OpportunityRepository",
    "OrganizationRepository",
    "UserRepository",
]
