"""Endpoints for sign up, sign in and password recovery."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from coretrack.application.use_cases.auth import (
    AuthenticationStatus,
    authenticate_user,
    evaluate_password_strength,
    issue_access_token,
    request_password_reset,
    resend_verification_email,
    reset_password,
    sign_up,
    verify_email,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.infrastructure.security import refresh_access_token
from coretrack.interfaces.api.dependencies import get_current_active_user, oauth2_scheme
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import (
    ForgotPasswordRequest,
    MessageResponse,
    PasswordStrengthRead,
    PasswordStrengthRequest,
    ResendVerificationRequest,
    ResetPasswordRequest,
    SignUpRequest,
    Token,
    UserRead,
    VerifyEmailRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_PASSWORD_RESET_MESSAGE = (
    "If the email is registered, you will receive a link to reset your password."
)
_VERIFICATION_MESSAGE = (
    "If the account exists and is not verified yet, a new verification email was sent."
)


def _token_response(user: User) -> Token:
    return Token(access_token=issue_access_token(user), role=user.role.alias)


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def sign_up_user(payload: SignUpRequest, db: Session = Depends(get_db)):
    """Create a regular account and send the verification email."""

    try:
        user = sign_up(
            db,
            email=payload.email,
            password=payload.password,
            full_name=payload.full_name,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


# The signature is the one expected by OAuth2PasswordRequestForm.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _token_response(user)


@router.get("/token/validate", response_model=Token)
def validate_access_token(
    request: Request,
    current_user: User = Depends(get_current_active_user),
    token: str = Depends(oauth2_scheme),
):
    """Check the token and renew its expiration."""

    refreshed_token = getattr(request.state, "refreshed_token", None)
    if not refreshed_token:
        try:
            refreshed_token = refresh_access_token(token)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
                headers={"WWW-Authenticate": "Bearer"},
            ) from exc
    return Token(access_token=refreshed_token, role=current_user.role.alias)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    return UserRead.model_validate(current_user)


@router.post("/signout", response_model=MessageResponse)
def sign_out(_: User = Depends(get_current_active_user)) -> MessageResponse:
    """Tokens are stateless; the client discards its copy."""

    return MessageResponse(message="Signed out")


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def forgot_password(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Email a reset link. The response does not reveal whether the email exists."""

    if not request_password_reset(db, email=payload.email):
        logger.info("Password reset not sent for %s", payload.email)
    return MessageResponse(message=_PASSWORD_RESET_MESSAGE)


@router.post("/reset-password", response_model=Token)
def reset_user_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    """Set a new password from a reset link and start a new session."""

    try:
        user = reset_password(db, token=payload.token, new_password=payload.new_password)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _token_response(user)


@router.post("/verify-email", response_model=UserRead)
def verify_user_email(payload: VerifyEmailRequest, db: Session = Depends(get_db)):
    try:
        user = verify_email(db, token=payload.token)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return UserRead.model_validate(user)


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def resend_verification(
    payload: ResendVerificationRequest, db: Session = Depends(get_db)
) -> MessageResponse:
    if not resend_verification_email(db, email=payload.email):
        logger.info("Verification email not sent for %s", payload.email)
    return MessageResponse(message=_VERIFICATION_MESSAGE)


@router.post("/password-strength", response_model=PasswordStrengthRead)
def password_strength(payload: PasswordStrengthRequest) -> PasswordStrengthRead:
    strength = evaluate_password_strength(payload.password)
    return PasswordStrengthRead(
        score=strength.score, label=strength.label, requirements=strength.requirements
    )
