"""Use cases for tasks inside projects."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.notifications import notify_safely
from coretrack.application.use_cases.projects import get_project
from coretrack.domain.entities import (
    TASK_PRIORITIES,
    TASK_STATUSES,
    TASK_STATUS_COMPLETED,
    Task,
    User,
)
from coretrack.domain.entities.task import TASK_STATUS_TODO
from coretrack.domain.exceptions import NotFoundError, PermissionDeniedError
from coretrack.infrastructure.repositories import ProjectRepository, TaskRepository, UserRepository

_UNSET: Any = object()


def _validate(title: str | None, status: str | None, priority: str | None) -> None:
    if title is not None and not title.strip():
        raise ValueError("Task title is required")
    if status is not None and status not in TASK_STATUSES:
        raise ValueError("Status must be one of: " + ", ".join(TASK_STATUSES))
    if priority is not None and priority not in TASK_PRIORITIES:
        raise ValueError("Priority must be one of: " + ", ".join(TASK_PRIORITIES))


def _ensure_assignee(session: Session, assigned_to: int | None) -> None:
    if assigned_to is not None and UserRepository(session).get(assigned_to) is None:
        raise ValueError("Assignee not found")


def _can_access(session: Session, user: User, task: Task) -> bool:
    if user.is_admin() or user.id in (task.created_by, task.assigned_to):
        return True
    project = ProjectRepository(session).get(task.project_id)
    return project is not None and project.created_by == user.id


def _notify_assignee(session: Session, *, actor: User, task: Task) -> None:
    if task.assigned_to is None or task.assigned_to == actor.id:
        return
    notify_safely(
        session,
        user_id=task.assigned_to,
        title="New task assigned",
        message=f'{actor.display_name} assigned you the task "{task.title}".',
        category="task",
        action_url=f"/tasks?task={task.id}",
        action_text="View task",
        metadata={"task_id": task.id, "project_id": task.project_id},
    )


def get_task(session: Session, *, user: User, task_id: int) -> Task:
    task = TaskRepository(session).get(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    if not _can_access(session, user, task):
        raise PermissionDeniedError("You do not have access to this task")
    return task


def list_tasks(
    session: Session,
    *,
    user: User,
    project_id: int | None = None,
    status: str | None = None,
    priority: str | None = None,
    assigned_to: int | None = None,
    search: str | None = None,
) -> list[Task]:
    _validate(None, status, priority)
    return list(
        TaskRepository(session).list(
            project_id=project_id,
            status=status,
            priority=priority,
            assigned_to=assigned_to,
            visible_to=None if user.is_admin() else user.id,
            search=(search or "").strip() or None,
        )
    )


def create_task(
    session: Session,
    *,
    user: User,
    project_id: int,
    title: str,
    description: str | None = None,
    assigned_to: int | None = None,
    status: str = TASK_STATUS_TODO,
    priority: str = "medium",
    due_date: date | None = None,
) -> Task:
    _validate(title, status, priority)
    project = get_project(session, user=user, project_id=project_id)
    _ensure_assignee(session, assigned_to)

    task = TaskRepository(session).create(
        Task(
            id=None,
            project_id=project.id,
            title=title.strip(),
            description=description,
            assigned_to=assigned_to,
            status=status,
            priority=priority,
            due_date=due_date,
            created_by=user.id,
        )
    )
    record_activity(
        session,
        user,
        "created",
        "task",
        task.id,
        {
            "title": task.title,
            "project_id": task.project_id,
            "project_title": project.title,
            "status": task.status,
            "priority": task.priority,
            "assigned_to": task.assigned_to,
        },
    )
    _notify_assignee(session, actor=user, task=task)
    return task


def update_task(
    session: Session,
    *,
    user: User,
    task_id: int,
    title: str | None = None,
    description: str | None = _UNSET,
    assigned_to: int | None = _UNSET,
    status: str | None = None,
    priority: str | None = None,
    due_date: date | None = _UNSET,
) -> Task:
    current = get_task(session, user=user, task_id=task_id)
    _validate(title, status, priority)

    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title.strip()
    if status is not None:
        changes["status"] = status
    if priority is not None:
        changes["priority"] = priority
    if description is not _UNSET:
        changes["description"] = description
    if due_date is not _UNSET:
        changes["due_date"] = due_date
    if assigned_to is not _UNSET:
        _ensure_assignee(session, assigned_to)
        changes["assigned_to"] = assigned_to

    updated = TaskRepository(session).update(replace(current, **changes))

    status_changed = updated.status != current.status
    details: dict[str, Any] = {"title": updated.title, "project_id": updated.project_id}
    if status_changed:
        details.update(
            status_changed=True,
            previous_status=current.status,
            new_status=updated.status,
        )
    if updated.assigned_to != current.assigned_to:
        details.update(previous_assigned_to=current.assigned_to, assigned_to=updated.assigned_to)

    action = "completed" if status_changed and updated.status == TASK_STATUS_COMPLETED else "updated"
    record_activity(session, user, action, "task", updated.id, details)

    if updated.assigned_to != current.assigned_to:
        _notify_assignee(session, actor=user, task=updated)
    return updated


def delete_task(session: Session, *, user: User, task_id: int) -> None:
    task = get_task(session, user=user, task_id=task_id)
    TaskRepository(session).delete(task.id)
    record_activity(
        session,
        user,
        "deleted",
        "task",
        task.id,
        {"title": task.title, "project_id": task.project_id},
    )


__all__ = ["create_task", "delete_task", "get_task", "list_tasks", "update_task"]
