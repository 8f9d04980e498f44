"""Use cases for reading user accounts."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from coretrack.domain.entities import User
from coretrack.domain.exceptions import NotFoundError
from coretrack.infrastructure.repositories import UserRepository

from .permissions import ensure_admin


def list_users(
    session: Session,
    *,
    actor: User,
    skip: int = 0,
    limit: int = 100,
    search: str | None = None,
) -> Sequence[User]:
    """Return a list of users respecting pagination parameters."""

    ensure_admin(actor)
    return UserRepository(session).list(skip=skip, limit=limit, search=search)


def get_user(session: Session, user_id: int) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


__all__ = ["get_user", "list_users"]
