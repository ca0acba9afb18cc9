"""Utility script to create an account and print a bearer token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from volunteer_match.domain.entities import (
    ROLE_ORGANIZATION,
    ROLE_VOLUNTEER,
    Organization,
    User,
)
from volunteer_match.infrastructure.database import SessionLocal, initialize_database
from volunteer_match.infrastructure.repositories import (
    OrganizationRepository,
    UserRepository,
)
from volunteer_match.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for account creation."""

    parser = argparse.ArgumentParser(
        description="Create a volunteer or organization account for Volunteer Match.",
    )
    parser.add_argument("--name", default="Administrator", help="Full name of the user")
    parser.add_argument("--email", default="admin@example.com", help="Email of the user")
    parser.add_argument(
        "--role",
        choices=[ROLE_VOLUNTEER, ROLE_ORGANIZATION],
        default=ROLE_ORGANIZATION,
        help="Account role (default: organization)",
    )
    parser.add_argument(
        "--organization",
        default=None,
        help="Name of the organization to create for an organization account.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an account using the provided command line arguments."""

    args = parse_args()
    if args.role == ROLE_ORGANIZATION and not args.organization:
        raise SystemExit("--organization is required for organization accounts.")

    initialize_database()

    session = SessionLocal()
    try:
        organization_id = None
        if args.role == ROLE_ORGANIZATION:
            organization = OrganizationRepository(session).create(
                Organization(id=None, name=args.organization, verified=True)
            )
            organization_id = organization.id
        user = UserRepository(session).create(
            User(
                id=None,
                email=args.email,
                name=args.name,
                role=args.role,
                organization_id=organization_id,
            )
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the account: {exc}") from exc
    finally:
        session.close()

    print(
        "Account created:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.name}\n"
        f"  Email: {user.email}\n"
        f"  Role: {user.role}\n"
        f"  Token: {create_access_token({'sub': str(user.id)})}"
    )


if __name__ == "__main__":
    main()
