"""Issue and resolve the JWTs handed to clients."""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.orm import Session

from coretrack.domain.entities import User
from coretrack.infrastructure.repositories import UserRepository
from coretrack.infrastructure.security import (
    PURPOSE_ACCESS,
    build_password_signature,
    create_access_token,
    create_purpose_token,
    decode_access_token,
)


def password_signature_for(user: User) -> str:
    return build_password_signature(
        user.password, is_active=user.is_active, token_version=user.token_version
    )


def issue_access_token(user: User, *, expires_delta: timedelta | None = None) -> str:
    return create_access_token(
        {
            "sub": user.email,
            "role": user.role.alias,
            "pwd_sig": password_signature_for(user),
        },
        expires_delta=expires_delta,
    )


def issue_purpose_token(user: User, *, purpose: str, expires_delta: timedelta) -> str:
    return create_purpose_token(
        subject=user.email,
        purpose=purpose,
        password_signature=password_signature_for(user),
        expires_delta=expires_delta,
    )


def resolve_token_user(
    session: Session, token: str, *, purpose: str = PURPOSE_ACCESS
) -> User:
    """Return the user ``token`` was issued to.

    Raises ``ValueError`` when the token is malformed, expired, issued for a
    different purpose or signed against outdated credentials.
    """

    payload = decode_access_token(token, purpose=purpose)
    email = payload.get("sub")
    signature = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature, str):
        raise ValueError("Could not validate credentials")

    user = UserRepository(session).get_by_email(email)
    if user is None:
        raise ValueError("Could not validate credentials")
    if signature != password_signature_for(user):
        raise ValueError("Could not validate credentials")
    return user


__all__ = [
    "issue_access_token",
    "issue_purpose_token",
    "password_signature_for",
    "resolve_token_user",
]
