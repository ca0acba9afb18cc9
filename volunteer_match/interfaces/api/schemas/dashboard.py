"""Schemas for dashboard and roster projections."""

from datetime import date

from pydantic import BaseModel, ConfigDict

from .application import ApplicationRead
from .opportunity import OpportunityRead


class RosterEntryRead(BaseModel):
    application: ApplicationRead
    volunteer_name: str
    volunteer_email: str

    model_config = ConfigDict(from_attributes=True)


class RosterRead(BaseModel):
    opportunity: OpportunityRead
    entries: list[RosterEntryRead]
    counts: dict[str, int]

    model_config = ConfigDict(from_attributes=True)


class HistoryEntryRead(BaseModel):
    application: ApplicationRead
    opportunity_title: str
    opportunity_status: str
    opportunity_date: date | None
    organization_name: str | None

    model_config = ConfigDict(from_attributes=True)


class VolunteerDashboardRead(BaseModel):
    role: str = "volunteer"
    volunteer_id: int
    applications: list[HistoryEntryRead]
    stats: dict[str, int]

    model_config = ConfigDict(from_attributes=True)


class OrganizationDashboardRead(BaseModel):
    role: str = "organization"
    organization_id: int
    rosters: list[RosterRead]
    stats: dict[str, int]

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "HistoryEntryRead",
    "OrganizationDashboardRead",
    "RosterEntryRead",
    "RosterRead",
    "VolunteerDashboardRead",
]
