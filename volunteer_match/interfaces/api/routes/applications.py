"""Routes driving the application lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from volunteer_match.application.retry import retry_on_store_unavailable
from volunteer_match.application.use_cases.applications import (
    decide_application as decide_application_uc,
    submit_application as submit_application_uc,
    withdraw_application as withdraw_application_uc,
)
from volunteer_match.application.use_cases.dashboards import get_volunteer_history
from volunteer_match.domain.entities import User
from volunteer_match.infrastructure.database import get_db
from volunteer_match.interfaces.api.dependencies import (
    require_organization_member,
    require_volunteer,
)
from volunteer_match.interfaces.api.schemas import (
    ApplicationCreate,
    ApplicationRead,
    DecisionRequest,
    DecisionResponse,
    HistoryEntryRead,
    WithdrawalResponse,
)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("/", response_model=ApplicationRead, status_code=status.HTTP_201_CREATED)
def submit_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_volunteer),
) -> ApplicationRead:
    """Apply to an opportunity; a second application to the same one is rejected."""

    application = retry_on_store_unavailable(
        lambda: submit_application_uc(
            db,
            volunteer_id=current_user.id,
            opportunity_id=payload.opportunity_id,
            message=payload.message,
        )
    )
    return ApplicationRead.model_validate(application)


@router.post("/{application_id}/decision", response_model=DecisionResponse)
def decide_application(
    application_id: int,
    payload: DecisionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organization_member),
) -> DecisionResponse:
    """Approve or reject a pending application.

    Repeating the decision already recorded answers 200 with ``changed=false``.
    """

    outcome = retry_on_store_unavailable(
        lambda: decide_application_uc(
            db,
            application_id=application_id,
            decision=payload.decision,
            actor_id=current_user.id,
        )
    )
    return DecisionResponse(
        application=ApplicationRead.model_validate(outcome.application),
        changed=outcome.changed,
    )


@router.post("/{application_id}/withdraw", response_model=WithdrawalResponse)
def withdraw_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_volunteer),
) -> WithdrawalResponse:
    outcome = retry_on_store_unavailable(
        lambda: withdraw_application_uc(
            db, application_id=application_id, volunteer_id=current_user.id
        )
    )
    return WithdrawalResponse.model_validate(outcome)


@router.get("/mine", response_model=list[HistoryEntryRead])
def list_my_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_volunteer),
) -> list[HistoryEntryRead]:
    """Return the caller's applications with the opportunity they target."""

    history = get_volunteer_history(db, volunteer_id=current_user.id)
    return [HistoryEntryRead.model_validate(entry) for entry in history.applications]
