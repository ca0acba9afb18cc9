"""Dashboard projector: counts by status, rosters and application history."""

from __future__ import annotations

from collections import Counter

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import (
    APPLICATION_TRANSITIONS,
    HistoryEntry,
    OpportunityRoster,
    OrganizationDashboard,
    OrganizationView,
    RosterEntry,
    User,
    VolunteerDashboard,
    VolunteerView,
)
from volunteer_match.domain.errors import NotAuthorized
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import (
    ApplicationRepository,
    OpportunityRepository,
    OrganizationRepository,
    UserRepository,
)

from ..opportunities._ownership import require_owned_opportunity


def _empty_counts() -> dict[str, int]:
    return {status: 0 for status in APPLICATION_TRANSITIONS}


def get_opportunity_roster(
    session: Session, *, opportunity_id: int, actor_id: int
) -> OpportunityRoster:
    """Return the applications of an opportunity owned by the actor's organization."""

    with unit_of_work(session):
        opportunity = require_owned_opportunity(session, opportunity_id, actor_id)
        return _roster(session, opportunity)


def get_volunteer_history(session: Session, *, volunteer_id: int) -> VolunteerDashboard:
    """Return every application of ``volunteer_id`` with its opportunity summary."""

    with unit_of_work(session):
        return _volunteer_dashboard(session, volunteer_id)


def build_dashboard(
    session: Session, *, user: User
) -> VolunteerDashboard | OrganizationDashboard:
    """Project the dashboard matching the capabilities of ``user``."""

    view = user.view()
    with unit_of_work(session):
        if isinstance(view, OrganizationView):
            return _organization_dashboard(session, view.organization_id)
        if isinstance(view, VolunteerView):
            return _volunteer_dashboard(session, view.user_id)
    raise NotAuthorized()


def _roster(session: Session, opportunity) -> OpportunityRoster:
    applications = ApplicationRepository(session).list_for_opportunity(opportunity.id)
    volunteers = UserRepository(session).get_map_by_ids(
        [application.volunteer_id for application in applications]
    )
    counts = _empty_counts()
    counts.update(Counter(application.status for application in applications))
    entries = []
    for application in applications:
        volunteer = volunteers.get(application.volunteer_id)
        entries.append(
            RosterEntry(
                application=application,
                volunteer_name=volunteer.name if volunteer else "",
                volunteer_email=volunteer.email if volunteer else "",
            )
        )
    return OpportunityRoster(opportunity=opportunity, entries=entries, counts=counts)


def _volunteer_dashboard(session: Session, volunteer_id: int) -> VolunteerDashboard:
    applications = ApplicationRepository(session).list_for_volunteer(volunteer_id)
    opportunities = OpportunityRepository(session)
    organizations = OrganizationRepository(session)
    organization_names: dict[int, str | None] = {}

    history = []
    for application in applications:
        opportunity = opportunities.get(application.opportunity_id)
        if opportunity is None:
            continue
        if opportunity.organization_id not in organization_names:
            organization = organizations.get(opportunity.organization_id)
            organization_names[opportunity.organization_id] = (
                organization.name if organization else None
            )
        history.append(
            HistoryEntry(
                application=application,
                opportunity_title=opportunity.title,
                opportunity_status=opportunity.status,
                opportunity_date=opportunity.event_date,
                organization_name=organization_names[opportunity.organization_id],
            )
        )

    stats = _empty_counts()
    stats.update(Counter(entry.application.status for entry in history))
    stats["total"] = len(history)
    return VolunteerDashboard(volunteer_id=volunteer_id, applications=history, stats=stats)


def _organization_dashboard(session: Session, organization_id: int) -> OrganizationDashboard:
    rosters = [
        _roster(session, opportunity)
        for opportunity in OpportunityRepository(session).list_by_organization(
            organization_id
        )
    ]
    stats = _empty_counts()
    for roster in rosters:
        for status, total in roster.counts.items():
            stats[status] = stats.get(status, 0) + total
    stats["opportunities"] = len(rosters)
    stats["open_slots"] = sum(roster.opportunity.open_slots for roster in rosters)
    return OrganizationDashboard(
        organization_id=organization_id, rosters=rosters, stats=stats
    )


__all__ = ["build_dashboard", "get_opportunity_roster", "get_volunteer_history"]
