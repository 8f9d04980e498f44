"""Use cases for the activity log."""

from .format_activity import UNKNOWN_ACTOR, actor_display_name, format_activity
from .list_activities import get_activity_stats, list_activities
from .record_activity import record_activity

__all__ = [
    "UNKNOWN_ACTOR",
    "actor_display_name",
    "format_activity",
    "get_activity_stats",
    "list_activities",
    "record_activity",
]
