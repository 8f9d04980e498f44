"""ORM models used by the application infrastructure."""

from .activity import ActivityModel
from .invitation import InvitationModel
from .notification import NotificationModel, NotificationPreferencesModel
from .project import ExpenseModel, GoalModel, ProjectModel, TaskModel
from .role import RoleModel
from .user import UserModel

__all__ = [
    "ActivityModel",
    "ExpenseModel",
    "GoalModel",
    "InvitationModel",
    "NotificationModel",
    "NotificationPreferencesModel",
    "ProjectModel",
    "RoleModel",
    "TaskModel",
    "UserModel",
]
