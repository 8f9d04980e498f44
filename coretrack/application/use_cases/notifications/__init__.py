"""Use cases for the notification inbox and its delivery preferences."""

from .dispatch import notify_safely, send_notification
from .preferences import (
    ensure_default_preferences,
    get_notification_preferences,
    should_send_notification,
    update_notification_preferences,
)
from .store import (
    NOTIFICATION_STATUSES,
    create_notification,
    delete_notification,
    get_unread_count,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "NOTIFICATION_STATUSES",
    "create_notification",
    "delete_notification",
    "ensure_default_preferences",
    "get_notification_preferences",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_safely",
    "send_notification",
    "should_send_notification",
    "update_notification_preferences",
]
