"""Use case for retrieving a single opportunity."""

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import Opportunity
from volunteer_match.domain.errors import NotFound
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import OpportunityRepository


def get_opportunity(session: Session, opportunity_id: int) -> Opportunity:
    """Return the opportunity identified by ``opportunity_id``."""

    with unit_of_work(session):
        opportunity = OpportunityRepository(session).get(opportunity_id)
    if opportunity is None:
        raise NotFound("Opportunity not found.")
    return opportunity


__all__ = ["get_opportunity"]
