"""Owner edits of an opportunity: capacity changes and closing."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import OPPORTUNITY_STATUS_CLOSED, Opportunity
from volunteer_match.domain.errors import CapacityBelowParticipants
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import OpportunityRepository

from ._ownership import require_owned_opportunity

logger = logging.getLogger(__name__)


def update_capacity(
    session: Session,
    *,
    opportunity_id: int,
    max_participants: int,
    actor_id: int,
) -> Opportunity:
    """Change ``max_participants``; never below the approved participant count."""

    if max_participants <= 0:
        raise ValueError("max_participants must be a positive integer")

    with unit_of_work(session):
        require_owned_opportunity(session, opportunity_id, actor_id)
        repository = OpportunityRepository(session)
        if not repository.set_max_participants(opportunity_id, max_participants):
            current = repository.get(opportunity_id)
            raise CapacityBelowParticipants(
                f"Capacity cannot be lower than the {current.current_participants} "
                "approved participants."
            )
        updated = repository.get(opportunity_id)

    logger.info(
        "Opportunity %s capacity set to %s by user %s",
        opportunity_id,
        max_participants,
        actor_id,
    )
    return updated


def close_opportunity(session: Session, *, opportunity_id: int, actor_id: int) -> Opportunity:
    """Close the opportunity; closing an already closed one is a no-op."""

    with unit_of_work(session):
        opportunity = require_owned_opportunity(session, opportunity_id, actor_id)
        repository = OpportunityRepository(session)
        if opportunity.status != OPPORTUNITY_STATUS_CLOSED:
            repository.close(opportunity_id)
            logger.info("Opportunity %s closed by user %s", opportunity_id, actor_id)
        return repository.get(opportunity_id)


__all__ = ["close_opportunity", "update_capacity"]
