"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from volunteer_match.domain.entities import Notification
from volunteer_match.infrastructure.models import NotificationModel
from volunteer_match.utils import as_utc, to_naive_utc, utc_now


class NotificationRepository:
    """Provide create-once, listing and read-flag operations for notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def get_for_event(self, *, event_id: int, recipient_id: int) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.event_id == event_id)
            .filter(NotificationModel.recipient_id == recipient_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def create_once(self, notification: Notification) -> Notification | None:
        """Insert ``notification`` unless its ``(event_id, recipient_id)`` exists.

        Returns ``None`` when the dedup index already holds a row, including the
        case where a concurrent delivery of the same event won the insert.
        """

        if self.get_for_event(
            event_id=notification.event_id, recipient_id=notification.recipient_id
        ):
            return None

        model = NotificationModel()
        model.recipient_id = notification.recipient_id
        model.event_id = notification.event_id
        model.kind = notification.kind
        model.message = notification.message
        model.link_to = notification.link_to
        model.is_read = False
        model.created_at = to_naive_utc(
            notification.created_at or utc_now()
        )
        try:
            with self.session.begin_nested():
                self.session.add(model)
        except IntegrityError:
            return None
        return self._to_entity(model)

    def list_for_recipient(
        self, recipient_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_recipient(
        self, recipient_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.is_read.is_(False))
            .order_by(NotificationModel.id.asc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_after(self, recipient_id: int, *, after_id: int) -> Sequence[Notification]:
        """Return notifications newer than ``after_id`` in creation order."""

        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.id > after_id)
            .order_by(NotificationModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def latest_id(self, recipient_id: int) -> int:
        value = (
            self.session.query(func.max(NotificationModel.id))
            .filter(NotificationModel.recipient_id == recipient_id)
            .scalar()
        )
        return value or 0

    def count_unread(self, recipient_id: int) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.is_read.is_(False))
            .scalar()
        )

    def mark_as_read(self, notification_id: int, *, recipient_id: int) -> bool:
        """Flip ``is_read``; returns ``True`` only when the flag actually changed."""

        statement = (
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .where(NotificationModel.recipient_id == recipient_id)
            .where(NotificationModel.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(statement).rowcount == 1

    def mark_all_as_read(self, recipient_id: int) -> int:
        statement = (
            update(NotificationModel)
            .where(NotificationModel.recipient_id == recipient_id)
            .where(NotificationModel.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(statement).rowcount

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            event_id=model.event_id,
            kind=model.kind,
            message=model.message,
            link_to=model.link_to,
            is_read=bool(model.is_read),
            created_at=as_utc(model.created_at),
        )


__all__ = ["NotificationRepository"]
