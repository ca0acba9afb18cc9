"""Domain entities representing marketplace users and their dashboard views."""

from __future__ import annotations

from dataclasses import dataclass

ROLE_VOLUNTEER = "volunteer"
ROLE_ORGANIZATION = "organization"


@dataclass
class Organization:
    """Organization that posts opportunities."""

    id: int | None
    name: str
    verified: bool = False


@dataclass
class User:
    """Authenticated account acting on the marketplace."""

    id: int | None
    email: str
    name: str
    role: str
    organization_id: int | None = None
    is_active: bool = True

    def is_volunteer(self) -> bool:
        return self.role == ROLE_VOLUNTEER

    def is_organization_member(self) -> bool:
        return self.role == ROLE_ORGANIZATION and self.organization_id is not None

    def view(self) -> "VolunteerView | OrganizationView":
        """Return the capability-tagged view of this user."""

        if self.is_organization_member():
            return OrganizationView(user_id=self.id, organization_id=self.organization_id)
        return VolunteerView(user_id=self.id)


@dataclass(frozen=True)
class VolunteerView:
    """Capabilities of a volunteer: apply, withdraw and see their history."""

    user_id: int


@dataclass(frozen=True)
class OrganizationView:
    """Capabilities of organization staff: publish and decide on applications."""

    user_id: int
    organization_id: int


__all__ = [
    "Organization",
    "OrganizationView",
    "ROLE_ORGANIZATION",
    "ROLE_VOLUNTEER",
    "User",
    "VolunteerView",
]
