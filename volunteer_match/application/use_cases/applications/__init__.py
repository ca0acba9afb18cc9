"""Use cases driving the application lifecycle."""

from .decide_application import DecisionOutcome, decide_application
from .submit_application import submit_application
from .withdraw_application import WithdrawalOutcome, withdraw_application

__all__ = [
    "DecisionOutcome",
    "decide_application",
    "submit_application",
    "WithdrawalOutcome",
    "withdraw_application",
]
