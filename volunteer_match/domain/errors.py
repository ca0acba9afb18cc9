"""Error taxonomy raised by the matching engine.

Domain rule violations describe a fact about the data (the opportunity is full,
the application was already decided) and retrying them never changes the outcome.
:class:`StoreUnavailable` is the only transient failure and the only one callers
may retry.
"""

from __future__ import annotations


class MatchingError(Exception):
    """Base class for every error surfaced by the matching engine."""

    code = "matching_error"
    default_detail = "The operation could not be completed."
    retryable = False

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(MatchingError):
    code = "not_found"
    default_detail = "The requested resource does not exist."


class DuplicateApplication(MatchingError):
    code = "duplicate_application"
    default_detail = "You have already applied to this opportunity."


class OpportunityUnavailable(MatchingError):
    code = "opportunity_unavailable"
    default_detail = "This opportunity is not accepting applications."


class OpportunityFull(MatchingError):
    code = "opportunity_full"
    default_detail = "This opportunity just filled up, please browse others."


class NotAuthorized(MatchingError):
    code = "not_authorized"
    default_detail = "You are not allowed to perform this action."


class AlreadyDecided(MatchingError):
    code = "already_decided"
    default_detail = "This application has already been decided."


class InvalidTransition(MatchingError):
    code = "invalid_transition"
    default_detail = "The application cannot move to the requested status."


class CapacityBelowParticipants(MatchingError):
    code = "capacity_below_participants"
    default_detail = "Capacity cannot be lower than the number of approved participants."


class StoreUnavailable(MatchingError):
    """Transient storage failure; the whole operation may be retried."""

    code = "store_unavailable"
    default_detail = "The service is temporarily unavailable, please try again."
    retryable = True


class CapacityLedgerError(RuntimeError):
    """Programming error: the capacity ledger was asked to release an empty slot."""


__all__ = [
    "MatchingError",
    "NotFound",
    "DuplicateApplication",
    "OpportunityUnavailable",
    "OpportunityFull",
    "NotAuthorized",
    "AlreadyDecided",
    "InvalidTransition",
    "CapacityBelowParticipants",
    "StoreUnavailable",
    "CapacityLedgerError",
]
