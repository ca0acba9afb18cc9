"""Lifecycle of an application through the transition use cases."""

from __future__ import annotations

import pytest

from volunteer_match.application.use_cases.applications import (
    decide_application,
    submit_application,
    withdraw_application,
)
from volunteer_match.application.use_cases.notifications import (
    count_unread_notifications,
    list_notifications,
)
from volunteer_match.domain.errors import (
    AlreadyDecided,
    DuplicateApplication,
    InvalidTransition,
    NotAuthorized,
    NotFound,
    OpportunityFull,
    StoreUnavailable,
)


def test_scenario_a_approval_takes_one_slot_and_notifies_volunteer(
    session, accounts, reload_opportunity
):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff, max_participants=2)

    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )
    assert application.status == "pending"

    outcome = decide_application(
        session, application_id=application.id, decision="approve", actor_id=staff.id
    )

    assert outcome.changed is True
    assert outcome.application.status == "approved"
    assert outcome.application.decided_by == staff.id
    stored = reload_opportunity(opportunity.id)
    assert stored.current_participants == 1
    assert stored.status == "active"

    inbox = list_notifications(session, recipient_id=volunteer.id)
    assert [n.message for n in inbox] == ["Your application to 'Beach cleanup' was approved."]
    assert inbox[0].link_to == f"/opportunities/{opportunity.id}"


def test_scenario_b_last_slot_flips_to_full_and_next_approval_fails(
    session, accounts, reload_opportunity, reload_application
):
    staff = accounts.organization_member()
    first, second, third = accounts.volunteer(), accounts.volunteer(), accounts.volunteer()
    opportunity = accounts.opportunity(staff, max_participants=2)

    applications = [
        submit_application(session, volunteer_id=v.id, opportunity_id=opportunity.id)
        for v in (first, second, third)
    ]
    decide_application(
        session, application_id=applications[0].id, decision="approve", actor_id=staff.id
    )
    decide_application(
        session, application_id=applications[1].id, decision="approve", actor_id=staff.id
    )

    stored = reload_opportunity(opportunity.id)
    assert stored.current_participants == 2
    assert stored.status == "full"

    with pytest.raises(OpportunityFull):
        decide_application(
            session,
            application_id=applications[2].id,
            decision="approve",
            actor_id=staff.id,
        )

    assert reload_application(applications[2].id).status == "pending"
    assert reload_opportunity(opportunity.id).current_participants == 2
    assert list_notifications(session, recipient_id=third.id) == []


def test_scenario_c_double_submission_keeps_one_row(
    session, accounts, count_applications
):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff)

    submit_application(session, volunteer_id=volunteer.id, opportunity_id=opportunity.id)
    with pytest.raises(DuplicateApplication):
        submit_application(
            session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
        )

    assert (
        count_applications(volunteer_id=volunteer.id, opportunity_id=opportunity.id)
        == 1
    )


def test_scenario_d_rejection_leaves_capacity_and_adds_unread(
    session, accounts, reload_opportunity
):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )
    before = count_unread_notifications(session, recipient_id=volunteer.id)

    outcome = decide_application(
        session, application_id=application.id, decision="reject", actor_id=staff.id
    )

    assert outcome.application.status == "rejected"
    assert reload_opportunity(opportunity.id).current_participants == 0
    assert count_unread_notifications(session, recipient_id=volunteer.id) == before + 1
    latest = list_notifications(session, recipient_id=volunteer.id)[0]
    assert latest.message == "Your application to 'Beach cleanup' was rejected."


def test_submission_notifies_every_organization_member(session, accounts):
    staff = accounts.organization_member()
    colleague = accounts.colleague(staff)
    volunteer = accounts.volunteer(name="Ada")
    opportunity = accounts.opportunity(staff)

    submit_application(session, volunteer_id=volunteer.id, opportunity_id=opportunity.id)

    for member in (staff, colleague):
        inbox = list_notifications(session, recipient_id=member.id)
        assert [n.message for n in inbox] == ["Ada applied to 'Beach cleanup'."]
        assert inbox[0].link_to == f"/dashboard?opportunity={opportunity.id}"


def test_repeating_a_decision_is_a_no_op(session, accounts, reload_opportunity):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )
    decide_application(
        session, application_id=application.id, decision="approve", actor_id=staff.id
    )

    replay = decide_application(
        session, application_id=application.id, decision="approve", actor_id=staff.id
    )

    assert replay.changed is False
    assert replay.event is None
    assert replay.application.status == "approved"
    assert reload_opportunity(opportunity.id).current_participants == 1
    assert len(list_notifications(session, recipient_id=volunteer.id)) == 1


def test_conflicting_decision_raises_already_decided(session, accounts):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )
    decide_application(
        session, application_id=application.id, decision="reject", actor_id=staff.id
    )

    with pytest.raises(AlreadyDecided):
        decide_application(
            session, application_id=application.id, decision="approve", actor_id=staff.id
        )


def test_only_the_owning_organization_can_decide(session, accounts):
    staff = accounts.organization_member()
    outsider = accounts.organization_member(organization_name="Other Org")
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )

    with pytest.raises(NotAuthorized):
        decide_application(
            session,
            application_id=application.id,
            decision="approve",
            actor_id=outsider.id,
        )
    with pytest.raises(NotAuthorized):
        decide_application(
            session,
            application_id=application.id,
            decision="approve",
            actor_id=volunteer.id,
        )


def test_unknown_decision_and_application(session, accounts):
    staff = accounts.organization_member()

    with pytest.raises(InvalidTransition):
        decide_application(session, application_id=1, decision="maybe", actor_id=staff.id)
    with pytest.raises(NotFound):
        decide_application(session, application_id=999, decision="approve", actor_id=staff.id)


def test_only_volunteers_can_apply(session, accounts):
    staff = accounts.organization_member()
    opportunity = accounts.opportunity(staff)

    with pytest.raises(NotAuthorized):
        submit_application(session, volunteer_id=staff.id, opportunity_id=opportunity.id)


def test_withdrawing_pending_application_deletes_it(
    session, accounts, reload_opportunity, reload_application
):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer(name="Grace")
    opportunity = accounts.opportunity(staff)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )

    outcome = withdraw_application(
        session, application_id=application.id, volunteer_id=volunteer.id
    )

    assert outcome.deleted is True
    assert outcome.released_slot is False
    assert reload_application(application.id) is None
    assert reload_opportunity(opportunity.id).current_participants == 0
    messages = [n.message for n in list_notifications(session, recipient_id=staff.id)]
    assert messages[0] == "Grace withdrew from 'Beach cleanup'."

    again = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )
    assert again.status == "pending"


def test_withdrawing_approved_application_reopens_full_opportunity(
    session, accounts, reload_opportunity, reload_application
):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff, max_participants=1)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )
    decide_application(
        session, application_id=application.id, decision="approve", actor_id=staff.id
    )
    assert reload_opportunity(opportunity.id).status == "full"

    outcome = withdraw_application(
        session, application_id=application.id, volunteer_id=volunteer.id
    )

    assert outcome.previous_status == "approved"
    assert outcome.released_slot is True
    assert reload_application(application.id).status == "withdrawn"
    stored = reload_opportunity(opportunity.id)
    assert stored.current_participants == 0
    assert stored.status == "active"


def test_withdrawal_rules(session, accounts):
    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    someone_else = accounts.volunteer()
    opportunity = accounts.opportunity(staff)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )

    with pytest.raises(NotAuthorized):
        withdraw_application(
            session, application_id=application.id, volunteer_id=someone_else.id
        )

    decide_application(
        session, application_id=application.id, decision="reject", actor_id=staff.id
    )
    with pytest.raises(InvalidTransition):
        withdraw_application(
            session, application_id=application.id, volunteer_id=volunteer.id
        )


def _locked_database(*args, **kwargs):
    from sqlalchemy.exc import OperationalError

    raise OperationalError("UPDATE opportunity", {}, Exception("database is locked"))


def test_store_failure_mid_decision_rolls_back_every_change(
    session, accounts, monkeypatch, reload_application, reload_opportunity
):
    from sqlalchemy import select

    from volunteer_match.infrastructure import database
    from volunteer_match.infrastructure.models import DomainEventModel
    from volunteer_match.infrastructure.repositories import CapacityLedger

    staff = accounts.organization_member()
    volunteer = accounts.volunteer()
    opportunity = accounts.opportunity(staff, max_participants=2)
    application = submit_application(
        session, volunteer_id=volunteer.id, opportunity_id=opportunity.id
    )
    monkeypatch.setattr(CapacityLedger, "try_reserve_slot", _locked_database)

    with pytest.raises(StoreUnavailable) as excinfo:
        decide_application(
            session, application_id=application.id, decision="approve", actor_id=staff.id
        )

    assert not isinstance(excinfo.value, OpportunityFull)
    assert excinfo.value.retryable is True
    assert reload_application(application.id).status == "pending"
    assert reload_opportunity(opportunity.id).current_participants == 0
    db = database.SessionLocal()
    try:
        kinds = db.scalars(select(DomainEventModel.kind)).all()
    finally:
        db.rollback()
        db.close()
    assert kinds == ["ApplicationSubmitted"]
