"""Role checks shared by the administrative use cases."""

from coretrack.domain.entities import User
from coretrack.domain.exceptions import PermissionDeniedError


def ensure_admin(actor: User) -> User:
    if not actor.is_admin():
        raise PermissionDeniedError("Not authorized - admin access required")
    return actor


__all__ = ["ensure_admin"]
