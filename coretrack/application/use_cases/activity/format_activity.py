"""Render activity records as one-line, human readable sentences."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from coretrack.domain.entities import ActivityRecord, TASK_STATUS_COMPLETED, normalize_action
from coretrack.utils import format_currency, past_tense

UNKNOWN_ACTOR = "Someone"

_TITLE_KEYS: Mapping[str, tuple[str, ...]] = {
    "project": ("title", "project_name"),
    "task": ("title", "task_title"),
    "goal": ("title", "goal_title"),
    "expense": ("description", "expense_title", "title"),
}
_TITLE_FALLBACKS: Mapping[str, str] = {
    "project": "Untitled Project",
    "task": "Untitled Task",
    "goal": "Untitled Goal",
    "expense": "Expense",
}

_PROFILE_FIELD_LABELS: Mapping[str, str] = {
    "full_name": "name",
    "bio": "bio",
    "phone": "phone",
    "company": "company",
    "website": "website",
}

_STATUS_LABELS: Mapping[str, str] = {
    "todo": "To Do",
    "in_progress": "In Progress",
    "completed": "Completed",
}


def actor_display_name(record: ActivityRecord) -> str:
    """Full name, then email, then ``"Someone"``."""

    actor = record.actor
    if actor is None:
        return UNKNOWN_ACTOR
    return (actor.full_name or "").strip() or (actor.email or "").strip() or UNKNOWN_ACTOR


def _title(entity_type: str, details: Mapping[str, Any]) -> str:
    for key in _TITLE_KEYS.get(entity_type, ("title",)):
        value = details.get(key)
        if value:
            return str(value)
    return _TITLE_FALLBACKS.get(entity_type, entity_type.capitalize())


def _status_label(value: Any) -> str:
    text = str(value)
    return _STATUS_LABELS.get(text, text.replace("_", " "))


def _changed(details: Mapping[str, Any], key: str) -> bool:
    previous_key = f"previous_{key}"
    return (
        key in details
        and previous_key in details
        and details[key] != details[previous_key]
    )


def _format_project(name: str, action: str, details: Mapping[str, Any]) -> str | None:
    title = _title("project", details)
    if action in {"created", "deleted"}:
        return f'{name} {action} project "{title}"'
    if action != "updated":
        return None
    sentence = f'{name} updated project "{title}"'
    if _changed(details, "title"):
        return f'{sentence} - renamed from "{details["previous_title"]}" to "{title}"'
    if _changed(details, "status"):
        return f"{sentence} - status changed to {details['status']}"
    if _changed(details, "budget"):
        if details["budget"] is None:
            return f"{sentence} - budget removed"
        return f"{sentence} - budget updated to {format_currency(details['budget'])}"
    return sentence


def _format_task(name: str, action: str, details: Mapping[str, Any]) -> str | None:
    title = _title("task", details)
    if action in {"created", "deleted"}:
        return f'{name} {action} task "{title}"'
    new_status = details.get("new_status")
    if action == "completed" or (
        action == "updated" and new_status == TASK_STATUS_COMPLETED
    ):
        return f'{name} completed task "{title}"'
    if action != "updated":
        return None
    if details.get("status_changed") and new_status:
        previous = details.get("previous_status") or details.get("old_status")
        if previous:
            return (
                f'{name} moved task "{title}" from '
                f"{_status_label(previous)} to {_status_label(new_status)}"
            )
        return f'{name} changed task "{title}" status to {_status_label(new_status)}'
    return f'{name} updated task "{title}"'


def _format_goal(name: str, action: str, details: Mapping[str, Any]) -> str | None:
    title = _title("goal", details)
    if action in {"created", "deleted", "completed"}:
        return f'{name} {action} goal "{title}"'
    progress = details.get("new_progress_percentage", details.get("new_progress"))
    if action == "progress_updated" or (action == "updated" and progress is not None):
        if progress is None:
            return f'{name} updated progress on "{title}"'
        return f'{name} updated progress on "{title}" to {progress}%'
    if action == "updated":
        return f'{name} updated goal "{title}"'
    return None


def _format_expense(name: str, action: str, details: Mapping[str, Any]) -> str | None:
    title = _title("expense", details)
    if action == "created":
        return f'{name} added expense "{title}" for {format_currency(details.get("amount"))}'
    if action in {"updated", "deleted"}:
        return f'{name} {action} expense "{title}"'
    return None


def _format_user(
    name: str, action: str, details: Mapping[str, Any], entity_id: str
) -> str | None:
    email = details.get("email") or entity_id
    if action == "invited":
        return f"{name} invited {email} to join"
    if action == "updated":
        return f"{name} updated user profile for {email}"
    if action == "role_changed":
        previous = details.get("previous_role") or details.get("old_role") or "unknown"
        new = details.get("new_role") or "unknown"
        return f"{name} changed {email}'s role from {previous} to {new}"
    if action == "deleted":
        return f"{name} removed user {email}"
    if action == "joined":
        return f"{name} joined the workspace"
    return None


def _format_profile(name: str, action: str, details: Mapping[str, Any]) -> str | None:
    if action == "avatar_updated":
        return f"{name} updated their avatar"
    if action != "updated":
        return None
    fields = [
        _PROFILE_FIELD_LABELS.get(str(field), str(field).replace("_", " "))
        for field in details.get("changed_fields") or ()
    ]
    if fields:
        return f"{name} updated their {', '.join(fields)}"
    return f"{name} updated their profile"


_SIMPLE_SENTENCES: Mapping[tuple[str, str], str] = {
    ("security", "password_changed"): "changed their password",
    ("security", "2fa_enabled"): "enabled two-factor authentication",
    ("security", "2fa_disabled"): "disabled two-factor authentication",
    ("security", "sessions_revoked"): "signed out of all sessions",
    ("notification", "preferences_updated"): "updated notification preferences",
    ("auth", "signed_up"): "created an account",
    ("auth", "password_reset"): "reset their password",
    ("settings", "updated"): "updated their settings",
}

_FORMATTERS: Mapping[str, Callable[[str, str, Mapping[str, Any]], str | None]] = {
    "project": _format_project,
    "task": _format_task,
    "goal": _format_goal,
    "expense": _format_expense,
    "profile": _format_profile,
}


def format_activity(record: ActivityRecord) -> str:
    """Return the display sentence for ``record``.

    Deterministic and free of side effects; unknown combinations fall back to
    ``"{actor} {action in past tense} {entity type}"``.
    """

    name = actor_display_name(record)
    action = normalize_action(record.action or "")
    entity_type = (record.entity_type or "").strip().lower()
    details: Mapping[str, Any] = record.details if isinstance(record.details, Mapping) else {}

    sentence: str | None = None
    if entity_type == "user":
        sentence = _format_user(name, action, details, record.entity_id)
    elif entity_type in _FORMATTERS:
        sentence = _FORMATTERS[entity_type](name, action, details)
    elif (entity_type, action) in _SIMPLE_SENTENCES:
        sentence = f"{name} {_SIMPLE_SENTENCES[(entity_type, action)]}"

    if sentence is None:
        sentence = f"{name} {past_tense(action)} {entity_type or 'item'}"
    return sentence


__all__ = ["UNKNOWN_ACTOR", "actor_display_name", "format_activity"]
