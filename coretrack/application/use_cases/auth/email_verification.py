"""Email ownership confirmation."""

from dataclasses import replace
from datetime import timedelta

from sqlalchemy.orm import Session

from coretrack.domain.entities import User
from coretrack.infrastructure.email import send_verification_email
from coretrack.infrastructure.repositories import UserRepository
from coretrack.infrastructure.security import (
    EMAIL_VERIFICATION_EXPIRE_HOURS,
    PURPOSE_EMAIL_VERIFICATION,
)

from .tokens import issue_purpose_token, resolve_token_user


def send_verification(user: User) -> bool:
    token = issue_purpose_token(
        user,
        purpose=PURPOSE_EMAIL_VERIFICATION,
        expires_delta=timedelta(hours=EMAIL_VERIFICATION_EXPIRE_HOURS),
    )
    return send_verification_email(user.email, token)


def resend_verification_email(session: Session, *, email: str) -> bool:
    """Send a fresh link. Unknown or already verified addresses are ignored."""

    user = UserRepository(session).get_by_email(email)
    if user is None or user.email_verified:
        return False
    return send_verification(user)


def verify_email(session: Session, *, token: str) -> User:
    try:
        user = resolve_token_user(session, token, purpose=PURPOSE_EMAIL_VERIFICATION)
    except ValueError as exc:
        raise ValueError("The verification link is invalid or has expired") from exc
    if user.email_verified:
        return user
    return UserRepository(session).update(replace(user, email_verified=True))


__all__ = ["resend_verification_email", "send_verification", "verify_email"]
