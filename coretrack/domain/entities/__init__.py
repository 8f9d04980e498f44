"""Domain entities exposed by the application."""

from .activity import (
    ActivityActor,
    ActivityRecord,
    ActivityStats,
    ENTITY_ACTIONS,
    ensure_supported_activity,
    normalize_action,
)
from .expense import Expense
from .goal import Goal
from .invitation import Invitation
from .notification import (
    CATEGORY_PREFERENCE_SUFFIXES,
    DIGEST_FREQUENCIES,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_CHANNELS,
    NOTIFICATION_TYPES,
    Notification,
    NotificationDispatchResult,
    NotificationPreferences,
)
from .project import PROJECT_STATUSES, Project
from .role import ROLE_ADMIN, ROLE_ALIASES, ROLE_USER, Role
from .task import TASK_PRIORITIES, TASK_STATUSES, TASK_STATUS_COMPLETED, Task
from .user import User

__all__ = [
    "ActivityActor",
    "ActivityRecord",
    "ActivityStats",
    "ENTITY_ACTIONS",
    "ensure_supported_activity",
    "normalize_action",
    "Expense",
    "Goal",
    "Invitation",
    "Notification",
    "NotificationDispatchResult",
    "NotificationPreferences",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_CHANNELS",
    "NOTIFICATION_TYPES",
    "CATEGORY_PREFERENCE_SUFFIXES",
    "DIGEST_FREQUENCIES",
    "Project",
    "PROJECT_STATUSES",
    "Role",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLE_ALIASES",
    "Task",
    "TASK_PRIORITIES",
    "TASK_STATUSES",
    "TASK_STATUS_COMPLETED",
    "User",
]
