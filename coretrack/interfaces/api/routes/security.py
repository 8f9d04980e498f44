"""Endpoints for password, two-factor and session settings."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coretrack.application.use_cases.security import (
    change_password,
    get_security_status,
    set_two_factor,
    sign_out_all_sessions,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import (
    MessageResponse,
    PasswordChange,
    SecurityStatusRead,
    TwoFactorUpdate,
)

router = APIRouter(prefix="/security", tags=["security"])


@router.get("/", response_model=SecurityStatusRead)
def read_security_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        security_status = get_security_status(db, user=current_user)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return SecurityStatusRead.model_validate(security_status)


@router.post("/password", response_model=MessageResponse)
def update_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    """Change the password. Existing tokens stop working afterwards."""

    try:
        change_password(
            db,
            user=current_user,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return MessageResponse(message="Password updated. Please sign in again.")


@router.put("/2fa", response_model=SecurityStatusRead)
def update_two_factor(
    payload: TwoFactorUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        set_two_factor(db, user=current_user, enabled=payload.enabled)
        security_status = get_security_status(db, user=current_user)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return SecurityStatusRead.model_validate(security_status)


@router.post("/signout-all", response_model=MessageResponse)
def sign_out_everywhere(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    try:
        sign_out_all_sessions(db, user=current_user)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return MessageResponse(message="Signed out of all sessions")
