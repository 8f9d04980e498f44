"""Domain entities for the activity (audit) log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

ACTION_CREATED = "created"
ACTION_UPDATED = "updated"
ACTION_DELETED = "deleted"
ACTION_COMPLETED = "completed"
ACTION_INVITED = "invited"
ACTION_JOINED = "joined"
ACTION_ROLE_CHANGED = "role_changed"
ACTION_PROGRESS_UPDATED = "progress_updated"
ACTION_AVATAR_UPDATED = "avatar_updated"
ACTION_PASSWORD_CHANGED = "password_changed"
ACTION_2FA_ENABLED = "2fa_enabled"
ACTION_2FA_DISABLED = "2fa_disabled"
ACTION_SESSIONS_REVOKED = "sessions_revoked"
ACTION_PREFERENCES_UPDATED = "preferences_updated"
ACTION_SIGNED_UP = "signed_up"
ACTION_PASSWORD_RESET = "password_reset"

ENTITY_PROJECT = "project"
ENTITY_TASK = "task"
ENTITY_GOAL = "goal"
ENTITY_EXPENSE = "expense"
ENTITY_USER = "user"
ENTITY_PROFILE = "profile"
ENTITY_SECURITY = "security"
ENTITY_NOTIFICATION = "notification"
ENTITY_AUTH = "auth"
ENTITY_SETTINGS = "settings"

ENTITY_ACTIONS: Mapping[str, frozenset[str]] = {
    ENTITY_PROJECT: frozenset({ACTION_CREATED, ACTION_UPDATED, ACTION_DELETED}),
    ENTITY_TASK: frozenset(
        {ACTION_CREATED, ACTION_UPDATED, ACTION_DELETED, ACTION_COMPLETED}
    ),
    ENTITY_GOAL: frozenset(
        {
            ACTION_CREATED,
            ACTION_UPDATED,
            ACTION_DELETED,
            ACTION_COMPLETED,
            ACTION_PROGRESS_UPDATED,
        }
    ),
    ENTITY_EXPENSE: frozenset({ACTION_CREATED, ACTION_UPDATED, ACTION_DELETED}),
    ENTITY_USER: frozenset(
        {
            ACTION_INVITED,
            ACTION_UPDATED,
            ACTION_ROLE_CHANGED,
            ACTION_DELETED,
            ACTION_JOINED,
        }
    ),
    ENTITY_PROFILE: frozenset({ACTION_UPDATED, ACTION_AVATAR_UPDATED}),
    ENTITY_SECURITY: frozenset(
        {
            ACTION_PASSWORD_CHANGED,
            ACTION_2FA_ENABLED,
            ACTION_2FA_DISABLED,
            ACTION_SESSIONS_REVOKED,
        }
    ),
    ENTITY_NOTIFICATION: frozenset({ACTION_PREFERENCES_UPDATED}),
    ENTITY_AUTH: frozenset({ACTION_SIGNED_UP, ACTION_PASSWORD_RESET}),
    ENTITY_SETTINGS: frozenset({ACTION_UPDATED}),
}

# Present-tense spellings still emitted by older clients.
_LEGACY_ACTIONS: Mapping[str, str] = {
    "create": ACTION_CREATED,
    "update": ACTION_UPDATED,
    "delete": ACTION_DELETED,
    "complete": ACTION_COMPLETED,
    "invite": ACTION_INVITED,
    "join": ACTION_JOINED,
}


def normalize_action(action: str) -> str:
    """Return the canonical past-tense spelling for ``action``."""

    cleaned = action.strip().lower()
    return _LEGACY_ACTIONS.get(cleaned, cleaned)


def ensure_supported_activity(action: str, entity_type: str) -> tuple[str, str]:
    """Normalize the pair and raise ``ValueError`` when it is not a known kind."""

    normalized_entity = entity_type.strip().lower()
    normalized_action = normalize_action(action)
    allowed = ENTITY_ACTIONS.get(normalized_entity)
    if allowed is None:
        raise ValueError(f"Unsupported activity entity type '{entity_type}'")
    if normalized_action not in allowed:
        raise ValueError(
            f"Unsupported action '{action}' for entity type '{normalized_entity}'"
        )
    return normalized_action, normalized_entity


@dataclass
class ActivityActor:
    """Profile fields of the acting user joined onto an activity."""

    id: int | None
    full_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


@dataclass
class ActivityRecord:
    """Immutable record of one user action."""

    id: int | None
    actor_id: int | None
    action: str
    entity_type: str
    entity_id: str
    details: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    actor: ActivityActor | None = None


@dataclass
class ActivityStats:
    total: int = 0
    today: int = 0
    this_week: int = 0
    by_action: dict[str, int] = field(default_factory=dict)
    by_entity: dict[str, int] = field(default_factory=dict)


__all__ = [
    "ActivityActor",
    "ActivityRecord",
    "ActivityStats",
    "ENTITY_ACTIONS",
    "normalize_action",
    "ensure_supported_activity",
    "ACTION_CREATED",
    "ACTION_UPDATED",
    "ACTION_DELETED",
    "ACTION_COMPLETED",
    "ACTION_INVITED",
    "ACTION_JOINED",
    "ACTION_ROLE_CHANGED",
    "ACTION_PROGRESS_UPDATED",
    "ACTION_AVATAR_UPDATED",
    "ACTION_PASSWORD_CHANGED",
    "ACTION_2FA_ENABLED",
    "ACTION_2FA_DISABLED",
    "ACTION_SESSIONS_REVOKED",
    "ACTION_PREFERENCES_UPDATED",
    "ACTION_SIGNED_UP",
    "ACTION_PASSWORD_RESET",
    "ENTITY_PROJECT",
    "ENTITY_TASK",
    "ENTITY_GOAL",
    "ENTITY_EXPENSE",
    "ENTITY_USER",
    "ENTITY_PROFILE",
    "ENTITY_SECURITY",
    "ENTITY_NOTIFICATION",
    "ENTITY_AUTH",
    "ENTITY_SETTINGS",
]
