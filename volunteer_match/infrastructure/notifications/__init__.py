"""Realtime notification helpers for the infrastructure layer."""

from .manager import (
    Channel,
    NotificationConnectionManager,
    NotificationLoader,
    NotificationStream,
    Snapshot,
    notification_manager,
)
from .publisher import (
    NotificationPublisher,
    dispatch_notifications,
    dispatch_read_receipt,
    notification_publisher,
)
from .serialization import serialize_notification

__all__ = [
    "Channel",
    "Snapshot",
    "NotificationConnectionManager",
    "NotificationLoader",
    "NotificationStream",
    "notification_manager",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notifications",
    "dispatch_read_receipt",
    "serialize_notification",
]
