"""Use cases for managing users."""

from .delete_user import delete_user
from .invite_user import accept_invitation, invite_user, list_pending_invitations
from .list_users import get_user, list_users
from .permissions import ensure_admin
from .update_user import update_user, update_user_role

__all__ = [
    "accept_invitation",
    "delete_user",
    "ensure_admin",
    "get_user",
    "invite_user",
    "list_pending_invitations",
    "list_users",
    "update_user",
    "update_user_role",
]
