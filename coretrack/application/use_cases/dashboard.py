"""Use case for computing the dashboard summary of the current user."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import format_activity, list_activities
from coretrack.application.use_cases.budget import usage_percentage
from coretrack.domain.entities import ActivityRecord, TASK_STATUS_COMPLETED, User
from coretrack.infrastructure.repositories import (
    ExpenseRepository,
    ProjectRepository,
    TaskRepository,
)
from coretrack.utils import today_in_app_timezone

RECENT_ACTIVITY_LIMIT = 5


@dataclass
class RecentActivity:
    """An activity paired with its rendered sentence."""

    record: ActivityRecord
    description: str


@dataclass
class DashboardSummary:
    """Headline numbers shown on the dashboard.

    Percentages are rounded but not clamped, so an over-spent budget reports
    more than 100.
    """

    project_count: int
    task_count: int
    completed_task_count: int
    overdue_task_count: int
    total_spent: float
    total_budget: float
    completion_percentage: int
    budget_percentage: int
    recent_activities: list[RecentActivity] = field(default_factory=list)


def get_dashboard_summary(session: Session, *, user: User) -> DashboardSummary:
    owner_id = None if user.is_admin() else user.id

    tasks = TaskRepository(session).list(visible_to=owner_id)
    today = today_in_app_timezone()
    completed = sum(task.status == TASK_STATUS_COMPLETED for task in tasks)
    overdue = sum(task.is_overdue(today) for task in tasks)

    projects = ProjectRepository(session)
    total_budget = projects.total_budget(created_by=owner_id)
    total_spent = ExpenseRepository(session).total(project_owner=owner_id)
    budget_percentage = usage_percentage(total_spent, total_budget)

    recent = list_activities(session, actor_id=owner_id, limit=RECENT_ACTIVITY_LIMIT)
    return DashboardSummary(
        project_count=projects.count(created_by=owner_id),
        task_count=len(tasks),
        completed_task_count=completed,
        overdue_task_count=overdue,
        total_spent=total_spent,
        total_budget=total_budget,
        completion_percentage=round(completed / len(tasks) * 100) if tasks else 0,
        budget_percentage=round(budget_percentage) if budget_percentage is not None else 0,
        recent_activities=[
            RecentActivity(record=record, description=format_activity(record))
            for record in recent
        ],
    )


__all__ = ["DashboardSummary", "RecentActivity", "get_dashboard_summary"]
