"""SQLAlchemy model for the durable domain event log."""

from sqlalchemy import Column, DateTime, Integer, JSON, String

from volunteer_match.infrastructure.database import Base
from volunteer_match.utils import naive_utc_now


class DomainEventModel(Base):
    """Append-only record of committed transitions.

    Rows are written in the same transaction as the state change they describe.
    ``dispatched_at`` stays empty until the notification fan-out has processed
    the event, which lets start-up redeliver anything left behind.
    """

    __tablename__ = "domain_event"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String(40), nullable=False)
    actor_id = Column(Integer, nullable=False)
    application_id = Column(Integer, nullable=False, index=True)
    opportunity_id = Column(Integer, nullable=False, index=True)
    volunteer_id = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    occurred_at = Column(DateTime, nullable=False, default=naive_utc_now)
    dispatched_at = Column(DateTime, nullable=True, index=True)


__all__ = ["DomainEventModel"]
