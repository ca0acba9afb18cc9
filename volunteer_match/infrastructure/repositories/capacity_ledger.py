"""Capacity ledger: atomic slot reservation on the opportunity row."""

from __future__ import annotations

import enum
import logging

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from volunteer_match.domain.entities import (
    OPPORTUNITY_STATUS_ACTIVE,
    OPPORTUNITY_STATUS_CLOSED,
    OPPORTUNITY_STATUS_FULL,
)
from volunteer_match.domain.errors import CapacityLedgerError
from volunteer_match.infrastructure.models import OpportunityModel

logger = logging.getLogger(__name__)


class SlotReservation(enum.Enum):
    RESERVED = "reserved"
    FULL = "full"


class CapacityLedger:
    """Reserve and release slots of an opportunity inside the caller's transaction.

    Both operations are a single conditional ``UPDATE``: the comparison against
    ``max_participants`` and the increment happen under the row's write lock, so
    concurrent reservations are strictly ordered and can never exceed capacity.
    The ledger never commits; the caller's unit of work decides.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def try_reserve_slot(self, opportunity_id: int) -> SlotReservation:
        next_count = OpportunityModel.current_participants + 1
        statement = (
            update(OpportunityModel)
            .where(OpportunityModel.id == opportunity_id)
            .where(OpportunityModel.status != OPPORTUNITY_STATUS_CLOSED)
            .where(
                OpportunityModel.current_participants
                < OpportunityModel.max_participants
            )
            .values(
                current_participants=next_count,
                status=case(
                    (next_count >= OpportunityModel.max_participants, OPPORTUNITY_STATUS_FULL),
                    else_=OPPORTUNITY_STATUS_ACTIVE,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(statement)
        if result.rowcount == 1:
            return SlotReservation.RESERVED
        return SlotReservation.FULL

    def release_slot(self, opportunity_id: int) -> None:
        statement = (
            update(OpportunityModel)
            .where(OpportunityModel.id == opportunity_id)
            .where(OpportunityModel.current_participants > 0)
            .values(
                current_participants=OpportunityModel.current_participants - 1,
                status=case(
                    (
                        OpportunityModel.status == OPPORTUNITY_STATUS_FULL,
                        OPPORTUNITY_STATUS_ACTIVE,
                    ),
                    else_=OpportunityModel.status,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(statement)
        if result.rowcount != 1:
            logger.error(
                "Capacity ledger asked to release a slot of opportunity %s with no participants",
                opportunity_id,
            )
            raise CapacityLedgerError(
                f"Opportunity {opportunity_id} has no reserved slot to release"
            )


__all__ = ["CapacityLedger", "SlotReservation"]
