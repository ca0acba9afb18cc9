"""Persistence helpers for the domain event log."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session

from volunteer_match.domain.entities import DomainEvent
from volunteer_match.infrastructure.models import DomainEventModel
from volunteer_match.utils import as_utc, to_naive_utc, utc_now


class EventRepository:
    """Append events and track which ones the fan-out has processed."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(self, event: DomainEvent) -> DomainEvent:
        model = DomainEventModel()
        model.kind = event.kind
        model.actor_id = event.actor_id
        model.application_id = event.application_id
        model.opportunity_id = event.opportunity_id
        model.volunteer_id = event.volunteer_id
        model.status = event.status
        model.payload = dict(event.payload or {})
        model.occurred_at = to_naive_utc(
            event.occurred_at or utc_now()
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def list_pending(self, *, limit: int = 100) -> Sequence[DomainEvent]:
        query = (
            self.session.query(DomainEventModel)
            .filter(DomainEventModel.dispatched_at.is_(None))
            .order_by(DomainEventModel.id.asc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_dispatched(self, event_id: int) -> None:
        self.session.execute(
            update(DomainEventModel)
            .where(DomainEventModel.id == event_id)
            .where(DomainEventModel.dispatched_at.is_(None))
            .values(dispatched_at=to_naive_utc(utc_now()))
            .execution_options(synchronize_session=False)
        )

    @staticmethod
    def _to_entity(model: DomainEventModel) -> DomainEvent:
        return DomainEvent(
            id=model.id,
            kind=model.kind,
            actor_id=model.actor_id,
            application_id=model.application_id,
            opportunity_id=model.opportunity_id,
            volunteer_id=model.volunteer_id,
            status=model.status,
            occurred_at=as_utc(model.occurred_at),
            payload=dict(model.payload or {}),
            dispatched_at=as_utc(model.dispatched_at),
        )


__all__ = ["EventRepository"]
