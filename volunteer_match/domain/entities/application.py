"""Domain entity and lifecycle rules for volunteer applications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from volunteer_match.domain.errors import InvalidTransition

APPLICATION_STATUS_PENDING = "pending"
APPLICATION_STATUS_APPROVED = "approved"
APPLICATION_STATUS_REJECTED = "rejected"
APPLICATION_STATUS_WITHDRAWN = "withdrawn"

DECISION_APPROVE = "approve"
DECISION_REJECT = "reject"

DECISION_TARGET_STATUS: dict[str, str] = {
    DECISION_APPROVE: APPLICATION_STATUS_APPROVED,
    DECISION_REJECT: APPLICATION_STATUS_REJECTED,
}

APPLICATION_TRANSITIONS: dict[str, list[str]] = {
    APPLICATION_STATUS_PENDING: [APPLICATION_STATUS_APPROVED, APPLICATION_STATUS_REJECTED],
    APPLICATION_STATUS_APPROVED: [APPLICATION_STATUS_WITHDRAWN],
    APPLICATION_STATUS_REJECTED: [],
    APPLICATION_STATUS_WITHDRAWN: [],
}


@dataclass
class Application:
    """A volunteer's request to fill one slot of an opportunity."""

    id: int | None
    volunteer_id: int
    opportunity_id: int
    status: str
    message: str | None = None
    applied_at: datetime | None = None
    decided_at: datetime | None = None
    decided_by: int | None = None


def is_valid_transition(current: str, target: str) -> bool:
    """Check if moving an application from *current* to *target* is allowed."""

    return target in APPLICATION_TRANSITIONS.get(current, [])


def ensure_transition(current: str, target: str) -> None:
    """Raise :class:`InvalidTransition` unless *current* → *target* is an edge."""

    if not is_valid_transition(current, target):
        raise InvalidTransition(
            f"An application cannot move from '{current}' to '{target}'."
        )


def decision_status(decision: str) -> str:
    """Return the application status produced by ``decision``."""

    try:
        return DECISION_TARGET_STATUS[decision]
    except KeyError:
        raise InvalidTransition(f"Unknown decision '{decision}'.") from None


__all__ = [
    "Application",
    "APPLICATION_STATUS_PENDING",
    "APPLICATION_STATUS_APPROVED",
    "APPLICATION_STATUS_REJECTED",
    "APPLICATION_STATUS_WITHDRAWN",
    "APPLICATION_TRANSITIONS",
    "DECISION_APPROVE",
    "DECISION_REJECT",
    "decision_status",
    "ensure_transition",
    "is_valid_transition",
]
