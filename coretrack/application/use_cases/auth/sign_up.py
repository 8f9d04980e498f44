"""Use case for self-service account creation."""

import logging

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.notifications import ensure_default_preferences
from coretrack.domain.entities import ROLE_USER, User
from coretrack.domain.exceptions import ConflictError
from coretrack.infrastructure.repositories import RoleRepository, UserRepository
from coretrack.infrastructure.security import get_password_hash

from .email_verification import send_verification
from .passwords import ensure_strong_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    normalized = email.strip().lower()
    if normalized.count("@") != 1 or normalized.startswith("@") or normalized.endswith("@"):
        raise ValueError("A valid email address is required")
    return normalized


def create_account(
    session: Session,
    *,
    email: str,
    password: str,
    full_name: str | None,
    role_alias: str = ROLE_USER,
    email_verified: bool = False,
) -> User:
    """Create the user row and its default notification preferences."""

    normalized_email = normalize_email(email)
    ensure_strong_password(password)

    repository = UserRepository(session)
    if repository.get_by_email(normalized_email):
        raise ConflictError("An account with this email already exists")

    role = RoleRepository(session).get_by_alias(role_alias)
    if role is None:
        raise ValueError(f"Role '{role_alias}' is not configured")

    user = repository.create(
        User(
            id=None,
            role=role,
            full_name=(full_name or "").strip() or None,
            email=normalized_email,
            password=get_password_hash(password),
            email_verified=email_verified,
        )
    )
    ensure_default_preferences(session, user_id=user.id)
    return user


def sign_up(session: Session, *, email: str, password: str, full_name: str | None) -> User:
    user = create_account(session, email=email, password=password, full_name=full_name)
    record_activity(session, user, "signed_up", "auth", user.id, {"email": user.email})
    if not send_verification(user):
        logger.warning("Verification email for %s could not be sent", user.email)
    return user


__all__ = ["create_account", "normalize_email", "sign_up"]
