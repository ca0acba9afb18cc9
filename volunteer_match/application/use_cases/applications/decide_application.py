"""Use case for an organization's approve/reject decision."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from volunteer_match.application.use_cases.notifications import emit_event
from volunteer_match.domain.entities import (
    APPLICATION_STATUS_APPROVED,
    APPLICATION_STATUS_PENDING,
    EVENT_APPLICATION_DECIDED,
    OPPORTUNITY_STATUS_CLOSED,
    Application,
    DomainEvent,
    Opportunity,
    decision_status,
)
from volunteer_match.domain.errors import (
    AlreadyDecided,
    NotAuthorized,
    NotFound,
    OpportunityFull,
    OpportunityUnavailable,
)
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.repositories import (
    ApplicationRepository,
    CapacityLedger,
    EventRepository,
    OpportunityRepository,
    SlotReservation,
    UserRepository,
)
from volunteer_match.utils import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecisionOutcome:
    """Result of :func:`decide_application`.

    ``changed`` is ``False`` when the same decision had already been applied and
    the call was treated as an idempotent replay.
    """

    application: Application
    changed: bool
    event: DomainEvent | None = None


def decide_application(
    session: Session,
    *,
    application_id: int,
    decision: str,
    actor_id: int,
) -> DecisionOutcome:
    """Approve or reject a pending application.

    Approval flips the application status and reserves a slot in the same
    transaction: if the opportunity is full the whole unit rolls back and the
    application stays pending.
    """

    target_status = decision_status(decision)

    with unit_of_work(session):
        applications = ApplicationRepository(session)
        application = applications.get(application_id)
        if application is None:
            raise NotFound("Application not found.")

        opportunity = OpportunityRepository(session).get(application.opportunity_id)
        if opportunity is None:
            raise NotFound("Opportunity not found.")
        _ensure_owner(session, actor_id, opportunity)

        if application.status != APPLICATION_STATUS_PENDING:
            return _replay_or_conflict(application, target_status)

        if target_status == APPLICATION_STATUS_APPROVED and (
            opportunity.status == OPPORTUNITY_STATUS_CLOSED
        ):
            raise OpportunityUnavailable("This opportunity is closed.")

        decided_at = utc_now()
        moved = applications.transition(
            application_id,
            expected_status=APPLICATION_STATUS_PENDING,
            new_status=target_status,
            decided_by=actor_id,
            decided_at=decided_at,
        )
        if not moved:
            # A concurrent decision committed first.
            return _replay_or_conflict(applications.get(application_id), target_status)

        if target_status == APPLICATION_STATUS_APPROVED:
            reservation = CapacityLedger(session).try_reserve_slot(opportunity.id)
            if reservation is SlotReservation.FULL:
                raise OpportunityFull()

        event = EventRepository(session).append(
            DomainEvent(
                id=None,
                kind=EVENT_APPLICATION_DECIDED,
                actor_id=actor_id,
                application_id=application_id,
                opportunity_id=opportunity.id,
                volunteer_id=application.volunteer_id,
                status=target_status,
                occurred_at=decided_at,
                payload={
                    "opportunity_title": opportunity.title,
                    "organization_id": opportunity.organization_id,
                },
            )
        )
        updated = applications.get(application_id)

    logger.info(
        "Application %s %s by user %s", application_id, target_status, actor_id
    )
    emit_event(session, event)
    return DecisionOutcome(application=updated, changed=True, event=event)


def _ensure_owner(session: Session, actor_id: int, opportunity: Opportunity) -> None:
    actor = UserRepository(session).get(actor_id)
    if (
        actor is None
        or not actor.is_organization_member()
        or actor.organization_id != opportunity.organization_id
    ):
        raise NotAuthorized("Only the organization that owns this opportunity can decide.")


def _replay_or_conflict(application: Application | None, target_status: str) -> DecisionOutcome:
    if application is None:
        raise NotFound("Application not found.")
    if application.status == target_status:
        logger.warning(
            "Ignoring repeated '%s' decision for application %s",
            target_status,
            application.id,
        )
        return DecisionOutcome(application=application, changed=False)
    raise AlreadyDecided(f"This application is already {application.status}.")


__all__ = ["DecisionOutcome", "decide_application"]
