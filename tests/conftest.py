"""Shared fixtures: a throwaway SQLite store and account factories."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"volunteer_match_test_{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"

from volunteer_match.domain.entities import (  # noqa: E402
    ROLE_ORGANIZATION,
    ROLE_VOLUNTEER,
    Opportunity,
    Organization,
    User,
)
from volunteer_match.infrastructure import database  # noqa: E402
from volunteer_match.infrastructure.repositories import (  # noqa: E402
    OpportunityRepository,
    OrganizationRepository,
    UserRepository,
)
from volunteer_match.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""

    from volunteer_match.infrastructure import models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield


def pytest_sessionfinish(session, exitstatus):
    database.engine.dispose()
    for suffix in ("", "-wal", "-shm"):
        path = Path(f"{TEST_DB_PATH}{suffix}")
        if path.exists():
            path.unlink()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


class Accounts:
    """Create organizations, users and opportunities straight through the store."""

    def __init__(self) -> None:
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def organization_member(self, organization_name: str = "Helping Hands") -> User:
        index = self._next()
        db = database.SessionLocal()
        try:
            organization = OrganizationRepository(db).create(
                Organization(id=None, name=organization_name, verified=True)
            )
            user = UserRepository(db).create(
                User(
                    id=None,
                    email=f"staff{index}@example.org",
                    name=f"Staff {index}",
                    role=ROLE_ORGANIZATION,
                    organization_id=organization.id,
                )
            )
            db.commit()
            return user
        finally:
            db.close()

    def colleague(self, member: User) -> User:
        index = self._next()
        db = database.SessionLocal()
        try:
            user = UserRepository(db).create(
                User(
                    id=None,
                    email=f"colleague{index}@example.org",
                    name=f"Colleague {index}",
                    role=ROLE_ORGANIZATION,
                    organization_id=member.organization_id,
                )
            )
            db.commit()
            return user
        finally:
            db.close()

    def volunteer(self, name: str | None = None) -> User:
        index = self._next()
        db = database.SessionLocal()
        try:
            user = UserRepository(db).create(
                User(
                    id=None,
                    email=f"volunteer{index}@example.com",
                    name=name or f"Volunteer {index}",
                    role=ROLE_VOLUNTEER,
                )
            )
            db.commit()
            return user
        finally:
            db.close()

    def opportunity(
        self, owner: User, *, max_participants: int = 2, title: str = "Beach cleanup"
    ) -> Opportunity:
        db = database.SessionLocal()
        try:
            opportunity = OpportunityRepository(db).create(
                Opportunity(
                    id=None,
                    organization_id=owner.organization_id,
                    title=title,
                    description="Pick up litter along the shore.",
                    location="Santa Monica",
                    category="environment",
                    max_participants=max_participants,
                )
            )
            db.commit()
            return opportunity
        finally:
            db.close()


@pytest.fixture()
def accounts() -> Accounts:
    return Accounts()


@pytest.fixture()
def token_for():
    def _token(user: User) -> str:
        return create_access_token({"sub": str(user.id)})

    return _token


@pytest.fixture()
def reload_opportunity():
    """Read an opportunity back from the store with a fresh session."""

    def _reload(opportunity_id: int) -> Opportunity:
        db = database.SessionLocal()
        try:
            return OpportunityRepository(db).get(opportunity_id)
        finally:
            db.close()

    return _reload


@pytest.fixture()
def reload_application():
    """Read an application back from the store with a fresh session."""

    from volunteer_match.infrastructure.repositories import ApplicationRepository

    def _reload(application_id: int):
        db = database.SessionLocal()
        try:
            return ApplicationRepository(db).get(application_id)
        finally:
            db.close()

    return _reload


@pytest.fixture()
def count_applications():
    """Count stored applications for one volunteer/opportunity pair."""

    from sqlalchemy import func, select

    from volunteer_match.infrastructure.models import ApplicationModel

    def _count(*, volunteer_id: int, opportunity_id: int) -> int:
        db = database.SessionLocal()
        try:
            return db.scalar(
                select(func.count(ApplicationModel.id))
                .where(ApplicationModel.volunteer_id == volunteer_id)
                .where(ApplicationModel.opportunity_id == opportunity_id)
            )
        finally:
            db.close()

    return _count
