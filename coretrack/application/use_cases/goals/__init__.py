"""Use cases for goals."""

from .manage_goals import (
    UPDATE_MODES,
    clamp_progress,
    create_goal,
    delete_goal,
    get_goal,
    list_goals,
    update_goal,
    update_goal_progress,
)

__all__ = [
    "UPDATE_MODES",
    "clamp_progress",
    "create_goal",
    "delete_goal",
    "get_goal",
    "list_goals",
    "update_goal",
    "update_goal_progress",
]
