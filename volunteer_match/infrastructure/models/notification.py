"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import expression

from volunteer_match.infrastructure.database import Base
from volunteer_match.utils import naive_utc_now


class NotificationModel(Base):
    """Database representation for user notifications.

    The ``(event_id, recipient_id)`` unique index is the fan-out dedup key.
    """

    __tablename__ = "notification"
    __table_args__ = (
        UniqueConstraint("event_id", "recipient_id", name="uq_notification_event_recipient"),
        Index("ix_notification_recipient_unread", "recipient_id", "is_read"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id = Column(
        Integer, ForeignKey("domain_event.id", ondelete="CASCADE"), nullable=False
    )
    kind = Column(String(40), nullable=False)
    message = Column(Text, nullable=False)
    link_to = Column(String(255), nullable=True)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=naive_utc_now)


__all__ = ["NotificationModel"]
