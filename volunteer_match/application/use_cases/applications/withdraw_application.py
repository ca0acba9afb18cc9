"""Use case for a volunteer withdrawing an application."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from volunteer_match.application.use_cases.notifications import emit_event
from volunteer_match.domain.entities import (
    APPLICATION_STATUS_APPROVED,
    APPLICATION_STATUS_PENDING,
    APPLICATION_STATUS_WITHDRAWN,
    EVENT_APPLICATION_WITHDRAWN,
    DomainEvent,
    ensure_transition,
)
from volunteer_match.domain.errors import InvalidTransition, NotAuthorized, NotFound
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import (
    ApplicationRepository,
    CapacityLedger,
    EventRepository,
    OpportunityRepository,
)
from volunteer_match.utils import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WithdrawalOutcome:
    application_id: int
    previous_status: str
    released_slot: bool
    deleted: bool


def withdraw_application(
    session: Session,
    *,
    application_id: int,
    volunteer_id: int,
) -> WithdrawalOutcome:
    """Withdraw ``application_id`` on behalf of the volunteer who owns it.

    A pending application is deleted. An approved one becomes ``withdrawn`` and
    its slot is released in the same transaction, reopening a full opportunity.
    """

    with unit_of_work(session):
        applications = ApplicationRepository(session)
        application = applications.get(application_id)
        if application is None:
            raise NotFound("Application not found.")
        if application.volunteer_id != volunteer_id:
            raise NotAuthorized("Only the applicant can withdraw this application.")

        previous_status = application.status
        if previous_status == APPLICATION_STATUS_PENDING:
            if not applications.delete_if_status(
                application_id, expected_status=APPLICATION_STATUS_PENDING
            ):
                raise InvalidTransition("The application changed status; please reload.")
            released, deleted = False, True
        else:
            ensure_transition(previous_status, APPLICATION_STATUS_WITHDRAWN)
            if not applications.transition(
                application_id,
                expected_status=APPLICATION_STATUS_APPROVED,
                new_status=APPLICATION_STATUS_WITHDRAWN,
            ):
                raise InvalidTransition("The application changed status; please reload.")
            CapacityLedger(session).release_slot(application.opportunity_id)
            released, deleted = True, False

        opportunity = OpportunityRepository(session).get(application.opportunity_id)
        event = EventRepository(session).append(
            DomainEvent(
                id=None,
                kind=EVENT_APPLICATION_WITHDRAWN,
                actor_id=volunteer_id,
                application_id=application_id,
                opportunity_id=application.opportunity_id,
                volunteer_id=volunteer_id,
                status=APPLICATION_STATUS_WITHDRAWN,
                occurred_at=utc_now(),
                payload={
                    "opportunity_title": opportunity.title if opportunity else "",
                    "organization_id": opportunity.organization_id if opportunity else None,
                    "previous_status": previous_status,
                },
            )
        )

    logger.info(
        "Volunteer %s withdrew application %s (was %s)",
        volunteer_id,
        application_id,
        previous_status,
    )
    emit_event(session, event)
    return WithdrawalOutcome(
        application_id=application_id,
        previous_status=previous_status,
        released_slot=released,
        deleted=deleted,
    )


__all__ = ["WithdrawalOutcome", "withdraw_application"]
