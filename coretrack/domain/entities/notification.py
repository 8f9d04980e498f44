"""Domain entities for the per-user notification inbox."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_TYPES: tuple[str, ...] = ("info", "success", "warning", "error")
NOTIFICATION_CATEGORIES: tuple[str, ...] = (
    "project",
    "task",
    "goal",
    "expense",
    "system",
)
DIGEST_FREQUENCIES: tuple[str, ...] = ("daily", "weekly", "never")

# Category name -> suffix of the matching preference flag.
CATEGORY_PREFERENCE_SUFFIXES: dict[str, str] = {
    "project": "project_updates",
    "task": "task_assignments",
    "goal": "goal_reminders",
    "expense": "expense_alerts",
    "system": "system_updates",
}
NOTIFICATION_CHANNELS: tuple[str, ...] = ("email", "push")


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    title: str
    message: str
    category: str
    type: str = "info"
    read: bool = False
    action_url: str | None = None
    action_text: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class NotificationPreferences:
    """Per-user opt-in flags for each delivery channel and category."""

    id: int | None
    user_id: int
    email_project_updates: bool = True
    email_task_assignments: bool = True
    email_goal_reminders: bool = True
    email_expense_alerts: bool = True
    email_weekly_reports: bool = True
    email_system_updates: bool = True
    push_project_updates: bool = True
    push_task_assignments: bool = True
    push_goal_reminders: bool = True
    push_expense_alerts: bool = True
    push_system_updates: bool = True
    digest_frequency: str = "weekly"
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None
    timezone: str = "UTC"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def flag_for(self, channel: str, category: str) -> bool:
        """Return the ``{channel}_{category}`` flag, ``False`` when it does not exist."""

        suffix = CATEGORY_PREFERENCE_SUFFIXES.get(category, category)
        value = getattr(self, f"{channel}_{suffix}", None)
        return value is True


@dataclass
class NotificationDispatchResult:
    """Outcome of a preference-gated delivery."""

    notification: Notification | None
    skipped: bool = False
    emailed: bool = False


__all__ = [
    "Notification",
    "NotificationPreferences",
    "NotificationDispatchResult",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_CHANNELS",
    "CATEGORY_PREFERENCE_SUFFIXES",
    "DIGEST_FREQUENCIES",
]
