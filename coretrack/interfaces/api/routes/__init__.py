from fastapi import FastAPI

from .activity import router as activity_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .expenses import router as expenses_router
from .goals import router as goals_router
from .notifications import router as notifications_router
from .profile import router as profile_router
from .projects import router as projects_router
from .security import router as security_router
from .tasks import router as tasks_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(profile_router)
    app.include_router(security_router)
    app.include_router(projects_router)
    app.include_router(tasks_router)
    app.include_router(goals_router)
    app.include_router(expenses_router)
    app.include_router(activity_router)
    app.include_router(notifications_router)
    app.include_router(dashboard_router)
