"""Use case for submitting an application to an opportunity."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from volunteer_match.application.use_cases.notifications import emit_event
from volunteer_match.domain.entities import (
    APPLICATION_STATUS_PENDING,
    EVENT_APPLICATION_SUBMITTED,
    Application,
    DomainEvent,
)
from volunteer_match.domain.errors import (
    DuplicateApplication,
    NotAuthorized,
    NotFound,
    OpportunityUnavailable,
)
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import (
    ApplicationRepository,
    EventRepository,
    OpportunityRepository,
    UserRepository,
)
from volunteer_match.utils import utc_now

logger = logging.getLogger(__name__)


def submit_application(
    session: Session,
    *,
    volunteer_id: int,
    opportunity_id: int,
    message: str | None = None,
) -> Application:
    """Create a pending application for ``volunteer_id``.

    The uniqueness of ``(volunteer_id, opportunity_id)`` is enforced by the
    insert itself, so two simultaneous submissions produce one row and one
    :class:`DuplicateApplication`.
    """

    with unit_of_work(session):
        volunteer = UserRepository(session).get(volunteer_id)
        if volunteer is None or not volunteer.is_volunteer():
            raise NotAuthorized("Only volunteers can apply to opportunities.")

        opportunity = OpportunityRepository(session).get(opportunity_id)
        if opportunity is None:
            raise NotFound("Opportunity not found.")
        if not opportunity.is_accepting_applications():
            raise OpportunityUnavailable()

        try:
            application = ApplicationRepository(session).add(
                Application(
                    id=None,
                    volunteer_id=volunteer_id,
                    opportunity_id=opportunity_id,
                    status=APPLICATION_STATUS_PENDING,
                    message=(message or "").strip() or None,
                    applied_at=utc_now(),
                )
            )
        except IntegrityError as exc:
            raise DuplicateApplication() from exc

        event = EventRepository(session).append(
            DomainEvent(
                id=None,
                kind=EVENT_APPLICATION_SUBMITTED,
                actor_id=volunteer_id,
                application_id=application.id,
                opportunity_id=opportunity_id,
                volunteer_id=volunteer_id,
                status=application.status,
                occurred_at=application.applied_at,
                payload={
                    "opportunity_title": opportunity.title,
                    "organization_id": opportunity.organization_id,
                    "volunteer_name": volunteer.name,
                },
            )
        )

    logger.info(
        "Volunteer %s applied to opportunity %s (application %s)",
        volunteer_id,
        opportunity_id,
        application.id,
    )
    emit_event(session, event)
    return application


__all__ = ["submit_application"]
