"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from coretrack.application.use_cases.notifications import (
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    ensure_default_preferences,
    get_unread_count,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
    send_notification as send_notification_uc,
    update_notification_preferences,
)
from coretrack.domain.entities import User
from coretrack.domain.exceptions import NotFoundError
from coretrack.infrastructure.database import SessionLocal, get_db
from coretrack.infrastructure.notifications import notification_manager, serialize_notification
from coretrack.interfaces.api.dependencies import (
    get_current_active_user,
    require_admin,
    resolve_current_user,
)
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import (
    NotificationCreate,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    NotificationRead,
    NotificationSendResult,
    UnreadCountRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])

# Policy violation close code used for rejected websocket handshakes.
_WS_POLICY_VIOLATION = 1008


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    status_filter: str = Query("all", alias="status"),
    category: str | None = None,
    type_filter: str | None = Query(None, alias="type"),
    search: str | None = None,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the notifications of the authenticated user, newest first."""

    try:
        notifications = list_notifications_uc(
            db,
            user_id=current_user.id,
            status=status_filter,
            category=category,
            type=type_filter,
            search=search,
            limit=limit,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [NotificationRead.model_validate(item) for item in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=get_unread_count(db, user_id=current_user.id))


@router.post("/", response_model=NotificationSendResult, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> NotificationSendResult:
    """Send a notification to any user.

    With ``respect_preferences`` the recipient's channel preferences decide
    whether it is stored and mailed; otherwise it is stored unconditionally.
    """

    data = payload.model_dump(exclude={"respect_preferences"})
    try:
        if payload.respect_preferences:
            result = send_notification_uc(db, **data)
            return NotificationSendResult(
                notification=(
                    NotificationRead.model_validate(result.notification)
                    if result.notification is not None
                    else None
                ),
                skipped=result.skipped,
                emailed=result.emailed,
            )
        notification = create_notification_uc(db, **data)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return NotificationSendResult(
        notification=NotificationRead.model_validate(notification),
        skipped=False,
        emailed=False,
    )


@router.put("/read-all", response_model=list[NotificationRead])
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Mark every unread notification as read and return the updated ones."""

    updated = mark_all_notifications_read(db, user_id=current_user.id)
    return [NotificationRead.model_validate(item) for item in updated]


@router.get("/preferences", response_model=NotificationPreferencesRead)
def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    preferences = ensure_default_preferences(db, user_id=current_user.id)
    return NotificationPreferencesRead.model_validate(preferences)


@router.put("/preferences", response_model=NotificationPreferencesRead)
def update_preferences(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    try:
        preferences = update_notification_preferences(
            db, user=current_user, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return NotificationPreferencesRead.model_validate(preferences)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    try:
        notification = mark_notification_read(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    try:
        delete_notification_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _acknowledge(user_id: int, ids: list) -> None:
    with SessionLocal() as session:
        for notification_id in ids:
            if not isinstance(notification_id, int) or isinstance(notification_id, bool):
                continue
            try:
                mark_notification_read(
                    session, notification_id=notification_id, user_id=user_id
                )
            except NotFoundError:
                logger.debug(
                    "Ignoring ack for unknown notification %s", notification_id
                )


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=_WS_POLICY_VIOLATION)
        return

    with SessionLocal() as session:
        try:
            user = resolve_current_user(token, session)
        except HTTPException:
            await websocket.close(code=_WS_POLICY_VIOLATION)
            return
        if not user.is_active:
            await websocket.close(code=_WS_POLICY_VIOLATION)
            return
        pending = list_notifications_uc(session, user_id=user.id, status="unread")

    await notification_manager.connect(user.id, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(item) for item in pending]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                logger.debug("Ignoring malformed websocket frame from user %s", user.id)
                continue
            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "ack":
                ids = message.get("ids")
                if isinstance(ids, list) and ids:
                    _acknowledge(user.id, ids)
    except WebSocketDisconnect:
        pass
    finally:
        notification_manager.disconnect(user.id, websocket)


__all__ = ["router"]
