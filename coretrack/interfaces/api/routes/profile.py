"""Endpoints for the signed-in user's profile and avatar."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from coretrack.application.use_cases.profile import (
    delete_avatar,
    get_profile,
    update_profile,
    upload_avatar,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import ProfileUpdate, UserRead

router = APIRouter(prefix="/profile", tags=["profile"])
logger = logging.getLogger(__name__)


def _storage_unavailable(exc: RuntimeError) -> HTTPException:
    logger.error("Avatar storage unavailable: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Avatar storage is not available",
    )


@router.get("/", response_model=UserRead)
def read_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = get_profile(db, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


@router.patch("/", response_model=UserRead)
def edit_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = update_profile(
            db, user=current_user, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


@router.post("/avatar", response_model=UserRead)
async def upload_profile_avatar(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    content = await file.read()
    try:
        user = upload_avatar(
            db,
            user=current_user,
            filename=file.filename or "avatar",
            content=content,
            content_type=file.content_type,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    except RuntimeError as exc:
        raise _storage_unavailable(exc) from exc
    return UserRead.model_validate(user)


@router.delete("/avatar", response_model=UserRead)
def remove_profile_avatar(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = delete_avatar(db, user=current_user)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    except RuntimeError as exc:
        raise _storage_unavailable(exc) from exc
    return UserRead.model_validate(user)
