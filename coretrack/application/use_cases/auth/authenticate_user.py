"""Password sign-in."""

from dataclasses import replace
from enum import Enum, auto

from sqlalchemy.orm import Session

from coretrack.domain.entities import User
from coretrack.infrastructure.repositories import UserRepository
from coretrack.infrastructure.security import get_password_hash, needs_rehash, verify_password
from coretrack.utils import now_in_app_timezone


class AuthenticationStatus(Enum):
    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


def authenticate_user(
    session: Session, email: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Check the credentials and stamp ``last_login`` on success.

    An unknown email and a wrong password are indistinguishable to the caller.
    A deactivated account is reported only after the password matched. Hashes
    created with outdated parameters are upgraded in the same write.
    """

    repository = UserRepository(session)
    user = repository.get_by_email(email.strip())
    if user is None or not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS
    if not user.is_active:
        return user, AuthenticationStatus.INACTIVE

    password_hash = get_password_hash(password) if needs_rehash(user.password) else user.password
    signed_in = repository.update(
        replace(user, password=password_hash, last_login=now_in_app_timezone())
    )
    return signed_in, AuthenticationStatus.SUCCESS


__all__ = ["AuthenticationStatus", "authenticate_user"]
