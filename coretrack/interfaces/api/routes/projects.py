"""CRUD endpoints for projects."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from coretrack.application.use_cases.projects import (
    create_project as create_project_uc,
    delete_project as delete_project_uc,
    get_project_detail,
    list_projects as list_projects_uc,
    update_project as update_project_uc,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import (
    ProjectCreate,
    ProjectDetailRead,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/", response_model=list[ProjectRead])
def list_projects(
    status_filter: str | None = Query(None, alias="status"),
    search: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Projects of the current user; administrators see every project."""

    try:
        projects = list_projects_uc(
            db, user=current_user, status=status_filter, search=search
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [ProjectRead.model_validate(project) for project in projects]


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        project = create_project_uc(db, user=current_user, **payload.model_dump())
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ProjectRead.model_validate(project)


@router.get("/{project_id}", response_model=ProjectDetailRead)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        detail = get_project_detail(db, user=current_user, project_id=project_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ProjectDetailRead.model_validate(detail)


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        project = update_project_uc(
            db,
            user=current_user,
            project_id=project_id,
            **payload.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Delete the project and everything that belongs to it."""

    try:
        delete_project_uc(db, user=current_user, project_id=project_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
