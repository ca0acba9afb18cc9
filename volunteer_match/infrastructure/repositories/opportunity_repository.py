"""Persistence helpers for opportunity entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy import case, or_, select, update
from sqlalchemy.orm import Session

from volunteer_match.domain.entities import (
    OPPORTUNITY_STATUS_ACTIVE,
    OPPORTUNITY_STATUS_CLOSED,
    OPPORTUNITY_STATUS_FULL,
    Opportunity,
)
from volunteer_match.infrastructure.models import OpportunityModel
from volunteer_match.utils import as_utc, to_naive_utc


class OpportunityRepository:
    """Provide read and owner-edit operations for :class:`Opportunity` objects.

    Capacity counters are only written through :class:`CapacityLedger`.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, opportunity_id: int) -> Opportunity | None:
        statement = (
            select(OpportunityModel)
            .where(OpportunityModel.id == opportunity_id)
            .execution_options(populate_existing=True)
        )
        model = self.session.execute(statement).unique().scalar_one_or_none()
        return self._to_entity(model) if model else None

    def list_active(
        self,
        *,
        search: str | None = None,
        location: str | None = None,
        category: str | None = None,
        starting_from: date | None = None,
        limit: int = 100,
    ) -> Sequence[Opportunity]:
        query = self.session.query(OpportunityModel).filter(
            OpportunityModel.status == OPPORTUNITY_STATUS_ACTIVE
        )
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    OpportunityModel.title.ilike(pattern),
                    OpportunityModel.description.ilike(pattern),
                )
            )
        if location:
            query = query.filter(OpportunityModel.location.ilike(f"%{location.strip()}%"))
        if category and category != "all":
            query = query.filter(OpportunityModel.category == category)
        if starting_from is not None:
            query = query.filter(OpportunityModel.event_date >= starting_from)
        query = query.order_by(
            OpportunityModel.created_at.desc(), OpportunityModel.id.desc()
        ).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_by_organization(self, organization_id: int) -> Sequence[Opportunity]:
        query = (
            self.session.query(OpportunityModel)
            .filter(OpportunityModel.organization_id == organization_id)
            .order_by(OpportunityModel.created_at.desc(), OpportunityModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, opportunity: Opportunity) -> Opportunity:
        model = OpportunityModel()
        model.organization_id = opportunity.organization_id
        model.title = opportunity.title
        model.description = opportunity.description
        model.location = opportunity.location
        model.category = opportunity.category
        model.event_date = opportunity.event_date
        model.duration = opportunity.duration
        model.required_skills = list(opportunity.required_skills or [])
        model.max_participants = opportunity.max_participants
        model.current_participants = 0
        model.status = OPPORTUNITY_STATUS_ACTIVE
        if opportunity.created_at is not None:
            model.created_at = to_naive_utc(opportunity.created_at)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def set_max_participants(self, opportunity_id: int, max_participants: int) -> bool:
        """Change capacity unless it would drop below the approved count.

        Returns ``False`` when the guard rejected the edit. Open opportunities have
        their status recomputed from the new capacity; closed ones stay closed.
        """

        statement = (
            update(OpportunityModel)
            .where(OpportunityModel.id == opportunity_id)
            .where(OpportunityModel.current_participants <= max_participants)
            .values(
                max_participants=max_participants,
                status=case(
                    (
                        OpportunityModel.status == OPPORTUNITY_STATUS_CLOSED,
                        OPPORTUNITY_STATUS_CLOSED,
                    ),
                    (
                        OpportunityModel.current_participants >= max_participants,
                        OPPORTUNITY_STATUS_FULL,
                    ),
                    else_=OPPORTUNITY_STATUS_ACTIVE,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(statement).rowcount == 1

    def close(self, opportunity_id: int) -> bool:
        statement = (
            update(OpportunityModel)
            .where(OpportunityModel.id == opportunity_id)
            .where(OpportunityModel.status != OPPORTUNITY_STATUS_CLOSED)
            .values(status=OPPORTUNITY_STATUS_CLOSED)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(statement).rowcount == 1

    @staticmethod
    def _to_entity(model: OpportunityModel) -> Opportunity:
        return Opportunity(
            id=model.id,
            organization_id=model.organization_id,
            title=model.title,
            description=model.description or "",
            location=model.location or "",
            category=model.category or "",
            max_participants=model.max_participants,
            current_participants=model.current_participants,
            status=model.status,
            event_date=model.event_date,
            duration=model.duration,
            required_skills=list(model.required_skills or []),
            created_at=as_utc(model.created_at),
        )


__all__ = ["OpportunityRepository"]
