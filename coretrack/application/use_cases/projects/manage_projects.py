"""Use cases for creating, reading, updating and deleting projects."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.budget import clamp_percentage, usage_percentage
from coretrack.domain.entities import (
    PROJECT_STATUSES,
    TASK_STATUS_COMPLETED,
    Project,
    User,
)
from coretrack.domain.entities.project import PROJECT_STATUS_ACTIVE
from coretrack.domain.exceptions import NotFoundError, PermissionDeniedError
from coretrack.infrastructure.repositories import (
    ExpenseRepository,
    ProjectRepository,
    TaskRepository,
)
from coretrack.utils import today_in_app_timezone

_UNSET: Any = object()


@dataclass(frozen=True)
class ProjectDetail:
    project: Project
    total_spent: float
    remaining_budget: float | None
    budget_percentage: float | None
    budget_display_percentage: float
    task_count: int
    completed_task_count: int
    overdue_task_count: int


def _validate(title: str | None, budget: float | None, status: str | None) -> None:
    if title is not None and not title.strip():
        raise ValueError("Project title is required")
    if budget is not None and budget < 0:
        raise ValueError("Budget cannot be negative")
    if status is not None and status not in PROJECT_STATUSES:
        raise ValueError("Status must be one of: " + ", ".join(PROJECT_STATUSES))


def get_project(session: Session, *, user: User, project_id: int) -> Project:
    """Return the project when ``user`` owns it or is an administrator."""

    project = ProjectRepository(session).get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if not user.is_admin() and project.created_by != user.id:
        raise PermissionDeniedError("You do not have access to this project")
    return project


def list_projects(
    session: Session,
    *,
    user: User,
    status: str | None = None,
    search: str | None = None,
) -> list[Project]:
    if status is not None and status not in PROJECT_STATUSES:
        raise ValueError("Status must be one of: " + ", ".join(PROJECT_STATUSES))
    return list(
        ProjectRepository(session).list(
            created_by=None if user.is_admin() else user.id,
            status=status,
            search=(search or "").strip() or None,
        )
    )


def create_project(
    session: Session,
    *,
    user: User,
    title: str,
    description: str | None = None,
    budget: float | None = None,
    deadline: date | None = None,
    status: str = PROJECT_STATUS_ACTIVE,
) -> Project:
    _validate(title, budget, status)
    project = ProjectRepository(session).create(
        Project(
            id=None,
            title=title.strip(),
            description=description,
            budget=budget,
            deadline=deadline,
            status=status,
            created_by=user.id,
        )
    )
    record_activity(
        session,
        user,
        "created",
        "project",
        project.id,
        {"title": project.title, "status": project.status, "budget": project.budget},
    )
    return project


def update_project(
    session: Session,
    *,
    user: User,
    project_id: int,
    title: str | None = None,
    description: str | None = _UNSET,
    budget: float | None = _UNSET,
    deadline: date | None = _UNSET,
    status: str | None = None,
) -> Project:
    """Apply the given fields. Nullable fields are only touched when passed."""

    current = get_project(session, user=user, project_id=project_id)
    _validate(title, None if budget is _UNSET else budget, status)

    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title.strip()
    if status is not None:
        changes["status"] = status
    if description is not _UNSET:
        changes["description"] = description
    if budget is not _UNSET:
        changes["budget"] = budget
    if deadline is not _UNSET:
        changes["deadline"] = deadline

    updated = ProjectRepository(session).update(replace(current, **changes))

    details: dict[str, Any] = {"title": updated.title}
    for key in ("title", "status", "budget"):
        previous = getattr(current, key)
        new = getattr(updated, key)
        if previous != new:
            details[key] = new
            details[f"previous_{key}"] = previous
    record_activity(session, user, "updated", "project", updated.id, details)
    return updated


def delete_project(session: Session, *, user: User, project_id: int) -> None:
    """Delete the project together with its tasks, goals and expenses."""

    project = get_project(session, user=user, project_id=project_id)
    ProjectRepository(session).delete(project.id)
    record_activity(session, user, "deleted", "project", project.id, {"title": project.title})


def get_project_detail(session: Session, *, user: User, project_id: int) -> ProjectDetail:
    project = get_project(session, user=user, project_id=project_id)
    total_spent = ExpenseRepository(session).total_for_project(project.id)
    tasks = TaskRepository(session).list(project_id=project.id)
    today = today_in_app_timezone()
    percentage = usage_percentage(total_spent, project.budget)
    return ProjectDetail(
        project=project,
        total_spent=total_spent,
        remaining_budget=None if project.budget is None else project.budget - total_spent,
        budget_percentage=None if percentage is None else round(percentage, 1),
        budget_display_percentage=clamp_percentage(percentage),
        task_count=len(tasks),
        completed_task_count=sum(task.status == TASK_STATUS_COMPLETED for task in tasks),
        overdue_task_count=sum(task.is_overdue(today) for task in tasks),
    )


__all__ = [
    "ProjectDetail",
    "create_project",
    "delete_project",
    "get_project",
    "get_project_detail",
    "list_projects",
    "update_project",
]
