"""CRUD endpoints for tasks."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from coretrack.application.use_cases.tasks import (
    create_task as create_task_uc,
    delete_task as delete_task_uc,
    get_task,
    list_tasks as list_tasks_uc,
    update_task as update_task_uc,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=list[TaskRead])
def list_tasks(
    project_id: int | None = None,
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = None,
    assigned_to: int | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        tasks = list_tasks_uc(
            db,
            user=current_user,
            project_id=project_id,
            status=status_filter,
            priority=priority,
            assigned_to=assigned_to,
            search=search,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [TaskRead.model_validate(task) for task in tasks]


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        task = create_task_uc(db, user=current_user, **payload.model_dump())
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TaskRead.model_validate(task)


@router.get("/{task_id}", response_model=TaskRead)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        task = get_task(db, user=current_user, task_id=task_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TaskRead.model_validate(task)


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        task = update_task_uc(
            db,
            user=current_user,
            task_id=task_id,
            **payload.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        delete_task_uc(db, user=current_user, task_id=task_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
