"""Use case for publishing a new opportunity."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import Opportunity
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import OpportunityRepository
from volunteer_match.utils import utc_now

from ._ownership import require_organization_member

logger = logging.getLogger(__name__)


def create_opportunity(
    session: Session,
    *,
    actor_id: int,
    title: str,
    max_participants: int,
    description: str = "",
    location: str = "",
    category: str = "",
    event_date: date | None = None,
    duration: str | None = None,
    required_skills: list[str] | None = None,
) -> Opportunity:
    """Publish an opportunity owned by the actor's organization."""

    if max_participants <= 0:
        raise ValueError("max_participants must be a positive integer")
    if not title.strip():
        raise ValueError("title is required")

    skills = [skill.strip() for skill in (required_skills or []) if skill and skill.strip()]

    with unit_of_work(session):
        actor = require_organization_member(session, actor_id)
        opportunity = OpportunityRepository(session).create(
            Opportunity(
                id=None,
                organization_id=actor.organization_id,
                title=title.strip(),
                description=description,
                location=location,
                category=category,
                max_participants=max_participants,
                event_date=event_date,
                duration=duration,
                required_skills=skills,
                created_at=utc_now(),
            )
        )

    logger.info(
        "Organization %s published opportunity %s with %s slots",
        opportunity.organization_id,
        opportunity.id,
        max_participants,
    )
    return opportunity


__all__ = ["create_opportunity"]
