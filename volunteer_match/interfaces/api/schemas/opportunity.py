"""Schemas for opportunity endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class OpportunityCreate(BaseModel):
    """Payload required to publish an opportunity."""

    title: str = Field(..., min_length=1, max_length=255)
    max_participants: int = Field(..., gt=0)
    description: str = ""
    location: str = ""
    category: str = ""
    event_date: date | None = None
    duration: str | None = None
    required_skills: list[str] = Field(default_factory=list)


class CapacityUpdate(BaseModel):
    max_participants: int = Field(..., gt=0)

    model_config = ConfigDict(extra="forbid")


class OpportunityRead(BaseModel):
    id: int
    organization_id: int
    title: str
    description: str
    location: str
    category: str
    max_participants: int
    current_participants: int
    open_slots: int
    status: str
    event_date: date | None
    duration: str | None
    required_skills: list[str]
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["CapacityUpdate", "OpportunityCreate", "OpportunityRead"]
