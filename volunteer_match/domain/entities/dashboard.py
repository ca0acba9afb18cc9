"""Read models produced by the dashboard projector."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .application import Application
from .opportunity import Opportunity


@dataclass
class RosterEntry:
    application: Application
    volunteer_name: str
    volunteer_email: str


@dataclass
class OpportunityRoster:
    """Applications of one opportunity together with their counts by status."""

    opportunity: Opportunity
    entries: list[RosterEntry] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)


@dataclass
class HistoryEntry:
    """One application in a volunteer's history with the opportunity it targets."""

    application: Application
    opportunity_title: str
    opportunity_status: str
    opportunity_date: date | None
    organization_name: str | None


@dataclass
class VolunteerDashboard:
    volunteer_id: int
    applications: list[HistoryEntry] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)


@dataclass
class OrganizationDashboard:
    organization_id: int
    rosters: list[OpportunityRoster] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)


__all__ = [
    "HistoryEntry",
    "OpportunityRoster",
    "OrganizationDashboard",
    "RosterEntry",
    "VolunteerDashboard",
]
