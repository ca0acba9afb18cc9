"""Persistence helpers for application entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from volunteer_match.domain.entities import Application
from volunteer_match.infrastructure.models import ApplicationModel
from volunteer_match.utils import as_utc, to_naive_utc


class ApplicationRepository:
    """Store applications and apply compare-and-swap status transitions."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, application_id: int) -> Application | None:
        statement = (
            select(ApplicationModel)
            .where(ApplicationModel.id == application_id)
            .execution_options(populate_existing=True)
        )
        model = self.session.execute(statement).unique().scalar_one_or_none()
        return self._to_entity(model) if model else None

    def add(self, application: Application) -> Application:
        """Insert ``application``; the unique index rejects a second row per pair.

        Raises :class:`sqlalchemy.exc.IntegrityError` from the flush when the pair
        already exists.
        """

        model = ApplicationModel()
        model.volunteer_id = application.volunteer_id
        model.opportunity_id = application.opportunity_id
        model.message = application.message
        model.status = application.status
        if application.applied_at is not None:
            model.applied_at = to_naive_utc(application.applied_at)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def transition(
        self,
        application_id: int,
        *,
        expected_status: str,
        new_status: str,
        decided_by: int | None = None,
        decided_at: datetime | None = None,
    ) -> bool:
        """Move the application to ``new_status`` only if it is still ``expected_status``."""

        values: dict[str, object] = {"status": new_status}
        if decided_by is not None:
            values["decided_by"] = decided_by
        if decided_at is not None:
            values["decided_at"] = to_naive_utc(decided_at)
        statement = (
            update(ApplicationModel)
            .where(ApplicationModel.id == application_id)
            .where(ApplicationModel.status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(statement).rowcount == 1

    def delete_if_status(self, application_id: int, *, expected_status: str) -> bool:
        statement = (
            delete(ApplicationModel)
            .where(ApplicationModel.id == application_id)
            .where(ApplicationModel.status == expected_status)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(statement).rowcount == 1

    def list_for_opportunity(self, opportunity_id: int) -> Sequence[Application]:
        query = (
            self.session.query(ApplicationModel)
            .filter(ApplicationModel.opportunity_id == opportunity_id)
            .order_by(ApplicationModel.applied_at.asc(), ApplicationModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_volunteer(self, volunteer_id: int) -> Sequence[Application]:
        query = (
            self.session.query(ApplicationModel)
            .filter(ApplicationModel.volunteer_id == volunteer_id)
            .order_by(ApplicationModel.applied_at.desc(), ApplicationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: ApplicationModel) -> Application:
        return Application(
            id=model.id,
            volunteer_id=model.volunteer_id,
            opportunity_id=model.opportunity_id,
            status=model.status,
            message=model.message,
            applied_at=as_utc(model.applied_at),
            decided_at=as_utc(model.decided_at),
            decided_by=model.decided_by,
        )


__all__ = ["ApplicationRepository"]
