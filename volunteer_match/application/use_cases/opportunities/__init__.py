"""Use cases for publishing and browsing opportunities."""

from .create_opportunity import create_opportunity
from .get_opportunity import get_opportunity
from .list_opportunities import list_opportunities
from .manage_opportunity import close_opportunity, update_capacity

__all__ = [
    "close_opportunity",
    "create_opportunity",
    "get_opportunity",
    "list_opportunities",
    "update_capacity",
]
