"""Forgot-password flow."""

from dataclasses import replace
from datetime import timedelta

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.domain.entities import User
from coretrack.infrastructure.email import send_password_reset_email
from coretrack.infrastructure.repositories import UserRepository
from coretrack.infrastructure.security import (
    PASSWORD_RESET_EXPIRE_MINUTES,
    PURPOSE_PASSWORD_RESET,
    get_password_hash,
)

from .passwords import ensure_strong_password
from .tokens import issue_purpose_token, resolve_token_user


def request_password_reset(session: Session, *, email: str) -> bool:
    """Email a reset link when ``email`` belongs to an active user.

    Returns whether an email was sent; callers must not reveal the result.
    """

    user = UserRepository(session).get_by_email(email)
    if user is None or not user.is_active:
        return False
    token = issue_purpose_token(
        user,
        purpose=PURPOSE_PASSWORD_RESET,
        expires_delta=timedelta(minutes=PASSWORD_RESET_EXPIRE_MINUTES),
    )
    return send_password_reset_email(user.email, token)


def reset_password(session: Session, *, token: str, new_password: str) -> User:
    """Exchange a reset token for a new password.

    The token is signed against the old password hash, so it stops working
    once it has been used.
    """

    try:
        user = resolve_token_user(session, token, purpose=PURPOSE_PASSWORD_RESET)
    except ValueError as exc:
        raise ValueError("The reset link is invalid or has expired") from exc
    if not user.is_active:
        raise ValueError("The reset link is invalid or has expired")
    ensure_strong_password(new_password)

    updated = UserRepository(session).update(
        replace(user, password=get_password_hash(new_password))
    )
    record_activity(session, updated, "password_reset", "auth", updated.id)
    return updated


__all__ = ["request_password_reset", "reset_password"]
