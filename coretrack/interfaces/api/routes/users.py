"""Administrative user management and invitations."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from coretrack.application.use_cases.users import (
    accept_invitation,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    invite_user,
    list_pending_invitations,
    list_users as list_users_uc,
    update_user as update_user_uc,
    update_user_role,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import require_admin
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import (
    InvitationAccept,
    InvitationCreate,
    InvitationCreateResponse,
    InvitationRead,
    UserRead,
    UserRoleUpdate,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserRead])
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    search: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    users = list_users_uc(db, actor=current_user, skip=skip, limit=limit, search=search)
    return [UserRead.model_validate(user) for user in users]


@router.post(
    "/invite",
    response_model=InvitationCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def invite(
    payload: InvitationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Invite an email address; the account is created when the link is used."""

    try:
        invitation, emailed = invite_user(
            db,
            actor=current_user,
            email=payload.email,
            full_name=payload.full_name,
            role_alias=payload.role,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return InvitationCreateResponse(
        invitation=InvitationRead.model_validate(invitation), email_sent=emailed
    )


@router.get("/invitations", response_model=list[InvitationRead])
def list_invitations(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return [
        InvitationRead.model_validate(invitation)
        for invitation in list_pending_invitations(db, actor=current_user)
    ]


@router.post(
    "/invitations/accept",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def accept(payload: InvitationAccept, db: Session = Depends(get_db)):
    """Public endpoint used from the invitation email."""

    try:
        user = accept_invitation(
            db,
            token=payload.token,
            password=payload.password,
            full_name=payload.full_name,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        user = get_user_uc(db, user_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        user = update_user_uc(
            db,
            actor=current_user,
            user_id=user_id,
            full_name=payload.full_name,
            role_alias=payload.role,
            is_active=payload.is_active,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


@router.put("/{user_id}/role", response_model=UserRead)
def change_role(
    user_id: int,
    payload: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        user = update_user_role(
            db, actor=current_user, user_id=user_id, role_alias=payload.role
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        delete_user_uc(db, actor=current_user, user_id=user_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
