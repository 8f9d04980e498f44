"""Use cases for projects."""

from .manage_projects import (
    ProjectDetail,
    create_project,
    delete_project,
    get_project,
    get_project_detail,
    list_projects,
    update_project,
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
