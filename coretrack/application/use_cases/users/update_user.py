"""Use cases for administrators editing other accounts."""

from dataclasses import replace

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.notifications import notify_safely
from coretrack.domain.entities import ROLE_ALIASES, User
from coretrack.domain.exceptions import PermissionDeniedError
from coretrack.infrastructure.repositories import RoleRepository, UserRepository

from .list_users import get_user
from .permissions import ensure_admin


def update_user_role(
    session: Session, *, actor: User, user_id: int, role_alias: str
) -> User:
    """Change the role of ``user_id``. Administrators cannot demote themselves."""

    ensure_admin(actor)
    if actor.id == user_id:
        raise PermissionDeniedError("Cannot change your own role")

    alias = role_alias.strip().lower()
    if alias not in ROLE_ALIASES:
        raise ValueError(f"Role '{role_alias}' is not allowed")
    role = RoleRepository(session).get_by_alias(alias)
    if role is None:
        raise ValueError(f"Role '{role_alias}' is not configured")

    current = get_user(session, user_id)
    if current.role.alias == role.alias:
        return current

    updated = UserRepository(session).update(replace(current, role=role))
    record_activity(
        session,
        actor,
        "role_changed",
        "user",
        updated.id,
        {
            "email": updated.email,
            "full_name": updated.full_name,
            "previous_role": current.role.alias,
            "new_role": updated.role.alias,
        },
    )
    notify_safely(
        session,
        user_id=updated.id,
        title="Your role was updated",
        message=f"Your role is now {role.name}.",
        category="system",
    )
    return updated


def update_user(
    session: Session,
    *,
    actor: User,
    user_id: int,
    full_name: str | None = None,
    role_alias: str | None = None,
    is_active: bool | None = None,
) -> User:
    """Update the provided user with the new values."""

    ensure_admin(actor)
    current = get_user(session, user_id)
    changed_fields: list[str] = []

    updated = current
    if full_name is not None and full_name.strip() != (current.full_name or ""):
        updated = replace(updated, full_name=full_name.strip() or None)
        changed_fields.append("full_name")
    if is_active is not None and is_active != current.is_active:
        if actor.id == user_id:
            raise PermissionDeniedError("Cannot deactivate your own account")
        updated = replace(updated, is_active=is_active)
        changed_fields.append("is_active")

    if changed_fields:
        updated = UserRepository(session).update(updated)
        record_activity(
            session,
            actor,
            "updated",
            "user",
            updated.id,
            {"email": updated.email, "changed_fields": changed_fields},
        )

    if role_alias is not None and role_alias.strip().lower() != updated.role.alias:
        updated = update_user_role(
            session, actor=actor, user_id=user_id, role_alias=role_alias
        )
    return updated


__all__ = ["update_user", "update_user_role"]
