"""Read-only projections consumed by dashboards."""

from .projector import (
    build_dashboard,
    get_opportunity_roster,
    get_volunteer_history,
)

__all__ = ["build_dashboard", "get_opportunity_roster", "get_volunteer_history"]
