"""Use case for deleting a user."""

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.domain.entities import User
from coretrack.domain.exceptions import PermissionDeniedError
from coretrack.infrastructure.repositories import UserRepository

from .list_users import get_user
from .permissions import ensure_admin


def delete_user(session: Session, *, actor: User, user_id: int) -> None:
    """Remove the account. Its past activities remain with no actor."""

    ensure_admin(actor)
    if actor.id == user_id:
        raise PermissionDeniedError("Cannot delete your own account")

    user = get_user(session, user_id)
    UserRepository(session).delete(user_id)
    record_activity(
        session,
        actor,
        "deleted",
        "user",
        user_id,
        {
            "email": user.email,
            "full_name": user.full_name,
            "role": user.role.alias,
            "deletion_method": "admin_action",
        },
    )
