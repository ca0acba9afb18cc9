"""Turn domain events into per-recipient notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from volunteer_match.domain.entities import (
    APPLICATION_STATUS_APPROVED,
    EVENT_APPLICATION_DECIDED,
    EVENT_APPLICATION_SUBMITTED,
    EVENT_APPLICATION_WITHDRAWN,
    DomainEvent,
    Notification,
)
from volunteer_match.infrastructure.database import unit_of_work
from volunteer_match.infrastructure.notifications import dispatch_notifications
from volunteer_match.infrastructure.repositories import (
    EventRepository,
    NotificationRepository,
    OpportunityRepository,
    UserRepository,
)


def resolve_recipients(session: Session, event: DomainEvent) -> list[int]:
    """Return the users that must hear about ``event``."""

    if event.kind == EVENT_APPLICATION_DECIDED:
        return [event.volunteer_id]

    if event.kind in (EVENT_APPLICATION_SUBMITTED, EVENT_APPLICATION_WITHDRAWN):
        organization_id = event.payload.get("organization_id")
        if organization_id is None:
            opportunity = OpportunityRepository(session).get(event.opportunity_id)
            organization_id = opportunity.organization_id if opportunity else None
        if organization_id is None:
            return []
        return UserRepository(session).list_ids_for_organization(organization_id)

    return []


def render_notification(session: Session, event: DomainEvent) -> tuple[str, str | None]:
    """Return the ``(message, link_to)`` pair shown for ``event``."""

    title = event.payload.get("opportunity_title") or "an opportunity"

    if event.kind == EVENT_APPLICATION_DECIDED:
        if event.status == APPLICATION_STATUS_APPROVED:
            message = f"Your application to '{title}' was approved."
        else:
            message = f"Your application to '{title}' was {event.status}."
        return message, f"/opportunities/{event.opportunity_id}"

    volunteer_name = event.payload.get("volunteer_name")
    if not volunteer_name:
        volunteer = UserRepository(session).get(event.volunteer_id)
        volunteer_name = volunteer.name if volunteer else "A volunteer"
    link = f"/dashboard?opportunity={event.opportunity_id}"

    if event.kind == EVENT_APPLICATION_SUBMITTED:
        return f"{volunteer_name} applied to '{title}'.", link
    if event.kind == EVENT_APPLICATION_WITHDRAWN:
        return f"{volunteer_name} withdrew from '{title}'.", link
    return f"'{title}' was updated.", link


def fan_out_event(session: Session, event: DomainEvent) -> list[Notification]:
    """Materialize the notifications for ``event`` and wake live subscribers.

    Safe to call any number of times for the same event: the
    ``(event_id, recipient_id)`` index lets only the first delivery insert.
    Recipient rows stay locked until commit, so each recipient's notifications
    become visible in id order.
    Returns the notifications created by this call.
    """

    with unit_of_work(session):
        recipients = resolve_recipients(session, event)
        UserRepository(session).lock_recipients(recipients)
        message, link_to = render_notification(session, event)
        repository = NotificationRepository(session)
        created: list[Notification] = []
        for recipient_id in recipients:
            notification = repository.create_once(
                Notification(
                    id=None,
                    recipient_id=recipient_id,
                    event_id=event.id,
                    kind=event.kind,
                    message=message,
                    link_to=link_to,
                    is_read=False,
                )
            )
            if notification is not None:
                created.append(notification)
        EventRepository(session).mark_dispatched(event.id)

    dispatch_notifications(notification.recipient_id for notification in created)
    return created


__all__ = ["fan_out_event", "render_notification", "resolve_recipients"]
