"""CRUD endpoints for goals and their progress."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from coretrack.application.use_cases.goals import (
    create_goal as create_goal_uc,
    delete_goal as delete_goal_uc,
    get_goal,
    list_goals as list_goals_uc,
    update_goal as update_goal_uc,
    update_goal_progress,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import (
    GoalCreate,
    GoalProgressUpdate,
    GoalRead,
    GoalUpdate,
)

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("/", response_model=list[GoalRead])
def list_goals(
    project_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    goals = list_goals_uc(db, user=current_user, project_id=project_id)
    return [GoalRead.model_validate(goal) for goal in goals]


@router.post("/", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
def create_goal(
    payload: GoalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        goal = create_goal_uc(db, user=current_user, **payload.model_dump())
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return GoalRead.model_validate(goal)


@router.get("/{goal_id}", response_model=GoalRead)
def read_goal(
    goal_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        goal = get_goal(db, user=current_user, goal_id=goal_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return GoalRead.model_validate(goal)


@router.patch("/{goal_id}", response_model=GoalRead)
def update_goal(
    goal_id: int,
    payload: GoalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        goal = update_goal_uc(
            db,
            user=current_user,
            goal_id=goal_id,
            **payload.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return GoalRead.model_validate(goal)


@router.post("/{goal_id}/progress", response_model=GoalRead)
def update_progress(
    goal_id: int,
    payload: GoalProgressUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Set or increment the current value; it never leaves ``[0, target]``."""

    try:
        goal = update_goal_progress(
            db,
            user=current_user,
            goal_id=goal_id,
            mode=payload.mode,
            value=payload.value,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return GoalRead.model_validate(goal)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(
    goal_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        delete_goal_uc(db, user=current_user, goal_id=goal_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
