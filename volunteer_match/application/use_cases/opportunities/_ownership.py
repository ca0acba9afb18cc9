"""Ownership checks shared by opportunity use cases."""

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import Opportunity, User
from volunteer_match.domain.errors import NotAuthorized, NotFound
from volunteer_match.infrastructure.repositories import OpportunityRepository, UserRepository


def require_organization_member(session: Session, actor_id: int) -> User:
    actor = UserRepository(session).get(actor_id)
    if actor is None or not actor.is_organization_member():
        raise NotAuthorized("Only organization staff can manage opportunities.")
    return actor


def require_owned_opportunity(session: Session, opportunity_id: int, actor_id: int) -> Opportunity:
    actor = require_organization_member(session, actor_id)
    opportunity = OpportunityRepository(session).get(opportunity_id)
    if opportunity is None:
        raise NotFound("Opportunity not found.")
    if opportunity.organization_id != actor.organization_id:
        raise NotAuthorized("This opportunity belongs to another organization.")
    return opportunity
