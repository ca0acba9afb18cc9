"""Public helpers for emitting domain events and reading notifications."""

from .emitter import emit_event, relay_pending_events
from .fan_out import fan_out_event, render_notification, resolve_recipients
from .inbox import (
    count_unread_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "emit_event",
    "relay_pending_events",
    "fan_out_event",
    "render_notification",
    "resolve_recipients",
    "count_unread_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
