from .activity import ActivityActorRead, ActivityRead, ActivityStatsRead, DashboardRead
from .auth import (
    ForgotPasswordRequest,
    MessageResponse,
    PasswordStrengthRead,
    PasswordStrengthRequest,
    ResendVerificationRequest,
    ResetPasswordRequest,
    SignUpRequest,
    Token,
    VerifyEmailRequest,
)
from .notification import (
    NotificationCreate,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    NotificationRead,
    NotificationSendResult,
    UnreadCountRead,
)
from .project import (
    BudgetCheckRead,
    BudgetPreviewRequest,
    ExpenseCreate,
    ExpenseRead,
    ExpenseUpdate,
    ExpenseWithBudgetRead,
    GoalCreate,
    GoalProgressUpdate,
    GoalRead,
    GoalUpdate,
    ProjectCreate,
    ProjectDetailRead,
    ProjectRead,
    ProjectUpdate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)
from .security import PasswordChange, SecurityStatusRead, TwoFactorUpdate
from .user import (
    InvitationAccept,
    InvitationCreate,
    InvitationCreateResponse,
    InvitationRead,
    ProfileUpdate,
    RoleRead,
    UserRead,
    UserRoleUpdate,
    UserUpdate,
)

__all__ = [
    "ActivityActorRead",
    "ActivityRead",
    "ActivityStatsRead",
    "BudgetCheckRead",
    "BudgetPreviewRequest",
    "DashboardRead",
    "ExpenseCreate",
    "ExpenseRead",
    "ExpenseUpdate",
    "ExpenseWithBudgetRead",
    "ForgotPasswordRequest",
    "GoalCreate",
    "GoalProgressUpdate",
    "GoalRead",
    "GoalUpdate",
    "InvitationAccept",
    "InvitationCreate",
    "InvitationCreateResponse",
    "InvitationRead",
    "MessageResponse",
    "NotificationCreate",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "NotificationSendResult",
    "PasswordChange",
    "PasswordStrengthRead",
    "PasswordStrengthRequest",
    "ProfileUpdate",
    "ProjectCreate",
    "ProjectDetailRead",
    "ProjectRead",
    "ProjectUpdate",
    "ResendVerificationRequest",
    "ResetPasswordRequest",
    "RoleRead",
    "SecurityStatusRead",
    "SignUpRequest",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "Token",
    "TwoFactorUpdate",
    "UnreadCountRead",
    "UserRead",
    "UserRoleUpdate",
    "UserUpdate",
    "VerifyEmailRequest",
]
