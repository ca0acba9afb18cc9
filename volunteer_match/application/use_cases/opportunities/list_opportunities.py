"""Use case for browsing open opportunities."""

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import Opportunity
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import OpportunityRepository


def list_opportunities(
    session: Session,
    *,
    search: str | None = None,
    location: str | None = None,
    category: str | None = None,
    starting_from: date | None = None,
    limit: int = 100,
) -> Sequence[Opportunity]:
    """Return active opportunities matching the filters, newest first."""

    with unit_of_work(session):
        return OpportunityRepository(session).list_active(
            search=search,
            location=location,
            category=category,
            starting_from=starting_from,
            limit=limit,
        )


__all__ = ["list_opportunities"]
