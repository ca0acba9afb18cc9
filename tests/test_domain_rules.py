import pytest

from volunteer_match.domain.entities import (
    Opportunity,
    OrganizationView,
    User,
    VolunteerView,
    decision_status,
    ensure_transition,
    is_valid_transition,
)
from volunteer_match.domain.errors import InvalidTransition, OpportunityFull, StoreUnavailable


@pytest.mark.parametrize(
    ("current", "target", "allowed"),
    [
        ("pending", "approved", True),
        ("pending", "rejected", True),
        ("approved", "withdrawn", True),
        ("pending", "withdrawn", False),
        ("rejected", "approved", False),
        ("withdrawn", "approved", False),
        ("approved", "rejected", False),
    ],
)
def test_application_transitions(current, target, allowed):
    assert is_valid_transition(current, target) is allowed


def test_ensure_transition_raises_for_illegal_edges():
    with pytest.raises(InvalidTransition):
        ensure_transition("rejected", "withdrawn")


def test_decision_status():
    assert decision_status("approve") == "approved"
    assert decision_status("reject") == "rejected"
    with pytest.raises(InvalidTransition):
        decision_status("withdraw")


def test_capacity_status_and_open_slots():
    opportunity = Opportunity(
        id=1,
        organization_id=1,
        title="t",
        description="",
        location="",
        category="",
        max_participants=3,
        current_participants=3,
        status="full",
    )

    assert opportunity.status == "full"
    assert opportunity.open_slots == 0
    assert opportunity.is_accepting_applications() is False


def test_user_views_are_tagged_by_capability():
    staff = User(id=1, email="a@x.org", name="A", role="organization", organization_id=9)
    volunteer = User(id=2, email="b@x.org", name="B", role="volunteer")

    assert staff.view() == OrganizationView(user_id=1, organization_id=9)
    assert volunteer.view() == VolunteerView(user_id=2)


def test_error_details_and_retryability():
    assert OpportunityFull().detail == "This opportunity just filled up, please browse others."
    assert OpportunityFull("custom").detail == "custom"
    assert StoreUnavailable.retryable is True
    assert OpportunityFull.retryable is False
