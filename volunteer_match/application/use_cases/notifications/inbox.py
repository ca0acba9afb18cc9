"""Use cases for a recipient reading their notifications."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from volunteer_match.config import get_settings
from volunteer_match.domain.entities import Notification
from volunteer_match.domain.errors import NotFound
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.notifications import dispatch_read_receipt
from volunteer_match.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    *,
    recipient_id: int,
    limit: int | None = None,
    unread_only: bool = False,
) -> Sequence[Notification]:
    """Return the most recent notifications for ``recipient_id``."""

    limit = limit or get_settings().notification_list_limit
    with unit_of_work(session):
        repository = NotificationRepository(session)
        if unread_only:
            return repository.list_unread_for_recipient(recipient_id, limit=limit)
        return repository.list_for_recipient(recipient_id, limit=limit)


def count_unread_notifications(session: Session, *, recipient_id: int) -> int:
    with unit_of_work(session):
        return NotificationRepository(session).count_unread(recipient_id)


def mark_notification_read(
    session: Session, *, notification_id: int, recipient_id: int
) -> bool:
    """Mark one notification read; returns ``True`` only if it was unread.

    Marking an already-read notification is a no-op. Notifications addressed to
    someone else are reported as missing.
    """

    with unit_of_work(session):
        repository = NotificationRepository(session)
        notification = repository.get(notification_id)
        if notification is None or notification.recipient_id != recipient_id:
            raise NotFound("Notification not found.")
        flipped = repository.mark_as_read(notification_id, recipient_id=recipient_id)

    dispatch_read_receipt(recipient_id, 1 if flipped else 0)
    return flipped


def mark_all_notifications_read(session: Session, *, recipient_id: int) -> int:
    with unit_of_work(session):
        flipped = NotificationRepository(session).mark_all_as_read(recipient_id)
    dispatch_read_receipt(recipient_id, flipped)
    return flipped


__all__ = [
    "count_unread_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
