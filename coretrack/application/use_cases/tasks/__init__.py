"""Use cases for tasks."""

from .manage_tasks import create_task, delete_task, get_task, list_tasks, update_task

__all__ = ["create_task", "delete_task", "get_task", "list_tasks", "update_task"]
