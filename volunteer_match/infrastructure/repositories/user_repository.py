"""Persistence layer for users and organizations."""

from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from volunteer_match.domain.entities import ROLE_ORGANIZATION, Organization, User
from volunteer_match.infrastructure.models import OrganizationModel, UserModel


class UserRepository:
    """Look up the accounts the matching engine notifies and authorizes."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter(UserModel.email == email).first()
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            email=user.email,
            name=user.name,
            role=user.role,
            organization_id=user.organization_id,
            is_active=user.is_active,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def list_ids_for_organization(self, organization_id: int) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.organization_id == organization_id)
            .filter(UserModel.role == ROLE_ORGANIZATION)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id.asc())
        )
        return [user_id for (user_id,) in query.all()]

    def lock_recipients(self, user_ids: list[int]) -> None:
        """Lock the recipients' rows until the surrounding transaction ends."""

        if user_ids:
            self.session.execute(self.lock_statement(user_ids)).all()

    @staticmethod
    def lock_statement(user_ids: list[int]) -> Select:
        # Always lock in id order.
        return (
            select(UserModel.id)
            .where(UserModel.id.in_(sorted(set(user_ids))))
            .order_by(UserModel.id.asc())
            .with_for_update()
        )

    def get_map_by_ids(self, user_ids: list[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(set(user_ids)))
        return {model.id: self._to_entity(model) for model in query.all()}

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            role=model.role,
            organization_id=model.organization_id,
            is_active=model.is_active,
        )


class OrganizationRepository:
    """Provide basic operations for :class:`Organization` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, organization_id: int) -> Organization | None:
        model = self.session.get(OrganizationModel, organization_id)
        return self._to_entity(model) if model else None

    def create(self, organization: Organization) -> Organization:
        model = OrganizationModel(name=organization.name, verified=organization.verified)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: OrganizationModel) -> Organization:
        return Organization(id=model.id, name=model.name, verified=model.verified)


__all__ = ["OrganizationRepository", "UserRepository"]
