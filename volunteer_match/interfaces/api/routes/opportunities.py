"""Routes for publishing, browsing and managing opportunities."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from volunteer_match.application.use_cases.dashboards import get_opportunity_roster
from volunteer_match.application.use_cases.opportunities import (
    close_opportunity as close_opportunity_uc,
    create_opportunity as create_opportunity_uc,
    get_opportunity as get_opportunity_uc,
    list_opportunities as list_opportunities_uc,
    update_capacity as update_capacity_uc,
)
from volunteer_match.domain.entities import Opportunity, User
from volunteer_match.infrastructure.database import get_db
from volunteer_match.interfaces.api.dependencies import (
    get_current_active_user,
    require_organization_member,
)
from volunteer_match.interfaces.api.schemas import (
    CapacityUpdate,
    OpportunityCreate,
    OpportunityRead,
    RosterRead,
)

router = APIRouter(prefix="/opportunities", tags=["opportunities"])


def _to_schema(opportunity: Opportunity) -> OpportunityRead:
    return OpportunityRead.model_validate(opportunity)


@router.post("/", response_model=OpportunityRead, status_code=status.HTTP_201_CREATED)
def create_opportunity(
    payload: OpportunityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organization_member),
) -> OpportunityRead:
    """Publish an opportunity for the caller's organization."""

    opportunity = create_opportunity_uc(
        db,
        actor_id=current_user.id,
        title=payload.title,
        max_participants=payload.max_participants,
        description=payload.description,
        location=payload.location,
        category=payload.category,
        event_date=payload.event_date,
        duration=payload.duration,
        required_skills=payload.required_skills,
    )
    return _to_schema(opportunity)


@router.get("/", response_model=list[OpportunityRead])
def list_opportunities(
    search: str | None = Query(default=None),
    location: str | None = Query(default=None),
    category: str | None = Query(default=None),
    starting_from: date | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> list[OpportunityRead]:
    """Browse active opportunities."""

    opportunities = list_opportunities_uc(
        db,
        search=search,
        location=location,
        category=category,
        starting_from=starting_from,
        limit=limit,
    )
    return [_to_schema(opportunity) for opportunity in opportunities]


@router.get("/{opportunity_id}", response_model=OpportunityRead)
def read_opportunity(
    opportunity_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> OpportunityRead:
    return _to_schema(get_opportunity_uc(db, opportunity_id))


@router.patch("/{opportunity_id}/capacity", response_model=OpportunityRead)
def update_capacity(
    opportunity_id: int,
    payload: CapacityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organization_member),
) -> OpportunityRead:
    """Change ``max_participants``; it can never drop below the approved count."""

    opportunity = update_capacity_uc(
        db,
        opportunity_id=opportunity_id,
        max_participants=payload.max_participants,
        actor_id=current_user.id,
    )
    return _to_schema(opportunity)


@router.post("/{opportunity_id}/close", response_model=OpportunityRead)
def close_opportunity(
    opportunity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organization_member),
) -> OpportunityRead:
    opportunity = close_opportunity_uc(
        db, opportunity_id=opportunity_id, actor_id=current_user.id
    )
    return _to_schema(opportunity)


@router.get("/{opportunity_id}/roster", response_model=RosterRead)
def read_roster(
    opportunity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organization_member),
) -> RosterRead:
    """List the applications received for an opportunity owned by the caller."""

    roster = get_opportunity_roster(
        db, opportunity_id=opportunity_id, actor_id=current_user.id
    )
    return RosterRead.model_validate(roster)
