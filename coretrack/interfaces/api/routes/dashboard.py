"""Dashboard summary endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coretrack.application.use_cases.dashboard import get_dashboard_summary
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.schemas import DashboardRead

from .activity import activity_to_schema

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=DashboardRead)
def read_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DashboardRead:
    summary = get_dashboard_summary(db, user=current_user)
    return DashboardRead(
        project_count=summary.project_count,
        task_count=summary.task_count,
        completed_task_count=summary.completed_task_count,
        overdue_task_count=summary.overdue_task_count,
        total_spent=summary.total_spent,
        total_budget=summary.total_budget,
        completion_percentage=summary.completion_percentage,
        budget_percentage=summary.budget_percentage,
        recent_activities=[
            activity_to_schema(item.record) for item in summary.recent_activities
        ],
    )
