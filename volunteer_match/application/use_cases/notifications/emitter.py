"""Hand committed domain events to the notification fan-out."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import DomainEvent
from volunteer_match.domain.errors import StoreUnavailable
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import EventRepository

from .fan_out import fan_out_event

logger = logging.getLogger(__name__)


def emit_event(session: Session, event: DomainEvent) -> None:
    """Deliver ``event`` to the fan-out once its transition has committed.

    The event row is already durable, so a failure here only delays the
    notifications: the event stays pending and :func:`relay_pending_events`
    delivers it later. The caller's operation is not failed.
    """

    try:
        fan_out_event(session, event)
    except StoreUnavailable:
        logger.warning("Event %s left pending for redelivery", event.id)


def relay_pending_events(session: Session, *, limit: int = 100) -> int:
    """Re-deliver committed events the fan-out has not processed, oldest first."""

    with unit_of_work(session):
        pending = list(EventRepository(session).list_pending(limit=limit))

    delivered = 0
    for event in pending:
        try:
            fan_out_event(session, event)
        except StoreUnavailable:
            logger.warning("Relay stopped at event %s; store unavailable", event.id)
            break
        delivered += 1

    if delivered:
        logger.info("Relayed %s pending domain events", delivered)
    return delivered


__all__ = ["emit_event", "relay_pending_events"]
