"""Password, two-factor and session management for the current user."""

from dataclasses import dataclass, replace
from datetime import datetime

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.auth import ensure_strong_password
from coretrack.application.use_cases.notifications import notify_safely
from coretrack.domain.entities import User
from coretrack.domain.exceptions import NotFoundError
from coretrack.infrastructure.repositories import UserRepository
from coretrack.infrastructure.security import get_password_hash, verify_password


@dataclass(frozen=True)
class SecurityStatus:
    two_factor_enabled: bool
    email_verified: bool
    last_login: datetime | None


def _reload(session: Session, user: User) -> User:
    current = UserRepository(session).get(user.id)
    if current is None:
        raise NotFoundError("User not found")
    return current


def get_security_status(session: Session, *, user: User) -> SecurityStatus:
    current = _reload(session, user)
    return SecurityStatus(
        two_factor_enabled=current.two_factor_enabled,
        email_verified=current.email_verified,
        last_login=current.last_login,
    )


def change_password(
    session: Session, *, user: User, current_password: str, new_password: str
) -> User:
    """Replace the password after verifying the current one.

    Existing tokens are signed against the old hash and stop working.
    """

    current = _reload(session, user)
    if not verify_password(current_password, current.password):
        raise ValueError("Current password is incorrect")
    if current_password == new_password:
        raise ValueError("The new password must be different from the current one")
    ensure_strong_password(new_password)

    updated = UserRepository(session).update(
        replace(current, password=get_password_hash(new_password))
    )
    record_activity(session, updated, "password_changed", "security", updated.id)
    notify_safely(
        session,
        user_id=updated.id,
        title="Password changed",
        message="Your password was changed. If this was not you, reset it immediately.",
        category="system",
        type="warning",
    )
    return updated


def set_two_factor(session: Session, *, user: User, enabled: bool) -> User:
    current = _reload(session, user)
    if current.two_factor_enabled == enabled:
        return current
    updated = UserRepository(session).update(replace(current, two_factor_enabled=enabled))
    record_activity(
        session,
        updated,
        "2fa_enabled" if enabled else "2fa_disabled",
        "security",
        updated.id,
    )
    return updated


def sign_out_all_sessions(session: Session, *, user: User) -> User:
    """Revoke every issued token by bumping ``token_version``."""

    current = _reload(session, user)
    updated = UserRepository(session).update(
        replace(current, token_version=current.token_version + 1)
    )
    record_activity(session, updated, "sessions_revoked", "security", updated.id)
    return updated


__all__ = [
    "SecurityStatus",
    "change_password",
    "get_security_status",
    "set_two_factor",
    "sign_out_all_sessions",
]
