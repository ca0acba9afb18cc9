"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from typing import Any

from anyio import to_thread
from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from volunteer_match.application.use_cases.notifications import (
    count_unread_notifications,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
)
from volunteer_match.domain.entities import User
from volunteer_match.domain.errors import MatchingError
from volunteer_match.infrastructure.database import SessionLocal, get_db
from volunteer_match.infrastructure.notifications import notification_manager
from volunteer_match.interfaces.api.dependencies import (
    get_current_active_user,
    resolve_current_user,
)
from volunteer_match.interfaces.api.schemas import (
    MarkReadResponse,
    NotificationRead,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(default=False),
    limit: int | None = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications_uc(
        db, recipient_id=current_user.id, limit=limit, unread_only=unread_only
    )
    return [NotificationRead.model_validate(n) for n in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountResponse:
    return UnreadCountResponse(
        unread_count=count_unread_notifications(db, recipient_id=current_user.id)
    )


@router.post("/{notification_id}/read", response_model=MarkReadResponse)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkReadResponse:
    """Mark one notification read; repeating the call changes nothing."""

    flipped = mark_notification_read(
        db, notification_id=notification_id, recipient_id=current_user.id
    )
    return MarkReadResponse(updated=1 if flipped else 0)


@router.post("/read-all", response_model=MarkReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkReadResponse:
    return MarkReadResponse(
        updated=mark_all_notifications_read(db, recipient_id=current_user.id)
    )


def _authenticate(token: str) -> User:
    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
    finally:
        session.close()
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return user


def _acknowledge(recipient_id: int, ids: list[Any]) -> None:
    session = SessionLocal()
    try:
        for notification_id in ids:
            if not isinstance(notification_id, int):
                continue
            try:
                mark_notification_read(
                    session, notification_id=notification_id, recipient_id=recipient_id
                )
            except MatchingError as exc:
                logger.info(
                    "Ignoring ack of notification %s for user %s: %s",
                    notification_id,
                    recipient_id,
                    exc.detail,
                )
    finally:
        session.close()


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        user = await to_thread.run_sync(_authenticate, token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    await websocket.accept()
    await notification_manager.connect(user.id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                logger.info("Ignoring malformed frame from user %s", user.id)
                continue
            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    await to_thread.run_sync(_acknowledge, user.id, ids)
                continue
    except WebSocketDisconnect:
        pass
    finally:
        notification_manager.disconnect(user.id, websocket)
