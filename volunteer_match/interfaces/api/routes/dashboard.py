"""Dashboard route returning the projection matching the caller's role."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from volunteer_match.application.use_cases.dashboards import build_dashboard
from volunteer_match.domain.entities import OrganizationDashboard, User
from volunteer_match.infrastructure.database import get_db
from volunteer_match.interfaces.api.dependencies import get_current_active_user
from volunteer_match.interfaces.api.schemas import (
    OrganizationDashboardRead,
    VolunteerDashboardRead,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=VolunteerDashboardRead | OrganizationDashboardRead)
def read_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> VolunteerDashboardRead | OrganizationDashboardRead:
    dashboard = build_dashboard(db, user=current_user)
    if isinstance(dashboard, OrganizationDashboard):
        return OrganizationDashboardRead.model_validate(dashboard)
    return VolunteerDashboardRead.model_validate(dashboard)
