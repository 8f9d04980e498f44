"""Use cases for measurable goals and their progress."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.notifications import notify_safely
from coretrack.application.use_cases.projects import get_project
from coretrack.domain.entities import Goal, User
from coretrack.domain.exceptions import NotFoundError, PermissionDeniedError
from coretrack.infrastructure.repositories import GoalRepository

UPDATE_MODE_SET = "set"
UPDATE_MODE_INCREMENT = "increment"
UPDATE_MODES: tuple[str, ...] = (UPDATE_MODE_SET, UPDATE_MODE_INCREMENT)

_UNSET: Any = object()


def clamp_progress(value: float, target_value: float) -> float:
    """Keep ``value`` inside ``[0, target_value]``."""

    return max(0.0, min(float(value), float(target_value)))


def _validate(title: str | None, target_value: float | None, current_value: float | None) -> None:
    if title is not None and not title.strip():
        raise ValueError("Goal title is required")
    if target_value is not None and target_value <= 0:
        raise ValueError("Target value must be greater than zero")
    if current_value is not None and current_value < 0:
        raise ValueError("Current value cannot be negative")


def _announce_if_reached(session: Session, user: User, *, previous: Goal, updated: Goal) -> None:
    """Record the completion and notify the owner when a write makes the goal reached."""

    if not updated.is_reached or previous.is_reached:
        return
    record_activity(session, user, "completed", "goal", updated.id, {"title": updated.title})
    if updated.created_by is not None:
        notify_safely(
            session,
            user_id=updated.created_by,
            title="Goal reached",
            message=f'The goal "{updated.title}" reached its target.',
            category="goal",
            type="success",
            action_url="/goals",
            action_text="View goals",
            metadata={"goal_id": updated.id},
        )


def get_goal(session: Session, *, user: User, goal_id: int) -> Goal:
    goal = GoalRepository(session).get(goal_id)
    if goal is None:
        raise NotFoundError("Goal not found")
    if not user.is_admin() and goal.created_by != user.id:
        raise PermissionDeniedError("You do not have access to this goal")
    return goal


def list_goals(session: Session, *, user: User, project_id: int | None = None) -> list[Goal]:
    return list(
        GoalRepository(session).list(
            created_by=None if user.is_admin() else user.id, project_id=project_id
        )
    )


def create_goal(
    session: Session,
    *,
    user: User,
    title: str,
    target_value: float,
    current_value: float = 0,
    description: str | None = None,
    project_id: int | None = None,
) -> Goal:
    _validate(title, target_value, current_value)
    if project_id is not None:
        get_project(session, user=user, project_id=project_id)

    goal = GoalRepository(session).create(
        Goal(
            id=None,
            project_id=project_id,
            title=title.strip(),
            description=description,
            target_value=target_value,
            current_value=clamp_progress(current_value, target_value),
            created_by=user.id,
        )
    )
    record_activity(
        session,
        user,
        "created",
        "goal",
        goal.id,
        {"title": goal.title, "target_value": goal.target_value, "project_id": goal.project_id},
    )
    return goal


def update_goal(
    session: Session,
    *,
    user: User,
    goal_id: int,
    title: str | None = None,
    description: str | None = _UNSET,
    target_value: float | None = None,
    project_id: int | None = _UNSET,
) -> Goal:
    current = get_goal(session, user=user, goal_id=goal_id)
    _validate(title, target_value, None)

    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title.strip()
    if description is not _UNSET:
        changes["description"] = description
    if target_value is not None:
        changes["target_value"] = target_value
        changes["current_value"] = clamp_progress(current.current_value, target_value)
    if project_id is not _UNSET:
        if project_id is not None:
            get_project(session, user=user, project_id=project_id)
        changes["project_id"] = project_id

    updated = GoalRepository(session).update(replace(current, **changes))
    details: dict[str, Any] = {"title": updated.title}
    if updated.target_value != current.target_value:
        details.update(previous_target_value=current.target_value, target_value=updated.target_value)
    record_activity(session, user, "updated", "goal", updated.id, details)
    _announce_if_reached(session, user, previous=current, updated=updated)
    return updated


def update_goal_progress(
    session: Session,
    *,
    user: User,
    goal_id: int,
    mode: str = UPDATE_MODE_SET,
    value: float,
) -> Goal:
    """Set or increment ``current_value``; the result is clamped to the target."""

    if mode not in UPDATE_MODES:
        raise ValueError("Mode must be one of: " + ", ".join(UPDATE_MODES))
    current = get_goal(session, user=user, goal_id=goal_id)

    raw_value = value if mode == UPDATE_MODE_SET else current.current_value + value
    new_value = clamp_progress(raw_value, current.target_value)
    updated = GoalRepository(session).update(replace(current, current_value=new_value))

    record_activity(
        session,
        user,
        "progress_updated",
        "goal",
        updated.id,
        {
            "title": updated.title,
            "previous_value": current.current_value,
            "new_value": updated.current_value,
            "target_value": updated.target_value,
            "progress_change": updated.current_value - current.current_value,
            "previous_progress_percentage": current.progress_percentage,
            "new_progress_percentage": updated.progress_percentage,
            "update_mode": mode,
            "increment_value": value if mode == UPDATE_MODE_INCREMENT else None,
        },
    )

    _announce_if_reached(session, user, previous=current, updated=updated)
    return updated


def delete_goal(session: Session, *, user: User, goal_id: int) -> None:
    goal = get_goal(session, user=user, goal_id=goal_id)
    GoalRepository(session).delete(goal.id)
    record_activity(session, user, "deleted", "goal", goal.id, {"title": goal.title})


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
