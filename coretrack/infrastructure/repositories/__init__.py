"""Repository implementations for infrastructure layer."""

from .activity_repository import ActivityRepository
from .expense_repository import ExpenseRepository
from .goal_repository import GoalRepository
from .invitation_repository import InvitationRepository
from .notification_preferences_repository import NotificationPreferencesRepository
from .notification_repository import NotificationRepository
from .project_repository import ProjectRepository
from .role_repository import RoleRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "ExpenseRepository",
    "GoalRepository",
    "InvitationRepository",
    "NotificationPreferencesRepository",
    "NotificationRepository",
    "ProjectRepository",
    "RoleRepository",
    "TaskRepository",
    "UserRepository",
]
