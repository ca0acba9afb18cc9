"""Schemas for application endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ApplicationCreate(BaseModel):
    opportunity_id: int
    message: str | None = Field(default=None, max_length=2000)


class DecisionRequest(BaseModel):
    """Decision taken by an organization member on a pending application."""

    decision: Literal["approve", "reject"]


class ApplicationRead(BaseModel):
    id: int
    volunteer_id: int
    opportunity_id: int
    status: str
    message: str | None
    applied_at: datetime | None
    decided_at: datetime | None
    decided_by: int | None

    model_config = ConfigDict(from_attributes=True)


class DecisionResponse(BaseModel):
    application: ApplicationRead
    changed: bool


class WithdrawalResponse(BaseModel):
    application_id: int
    previous_status: str
    released_slot: bool
    deleted: bool

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "ApplicationCreate",
    "ApplicationRead",
    "DecisionRequest",
    "DecisionResponse",
    "WithdrawalResponse",
]
