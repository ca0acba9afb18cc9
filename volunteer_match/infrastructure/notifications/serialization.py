"""JSON representation of notifications sent over realtime channels."""

from __future__ import annotations

from typing import Any

from volunteer_match.domain.entities import Notification


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "event_id": notification.event_id,
        "kind": notification.kind,
        "message": notification.message,
        "link_to": notification.link_to,
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


__all__ = ["serialize_notification"]
