"""Domain entity representing a task inside a project."""

from dataclasses import dataclass
from datetime import date, datetime

TASK_STATUS_TODO = "todo"
TASK_STATUS_IN_PROGRESS = "in_progress"
TASK_STATUS_COMPLETED = "completed"
TASK_STATUSES: tuple[str, ...] = (
    TASK_STATUS_TODO,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_COMPLETED,
)
TASK_PRIORITIES: tuple[str, ...] = ("low", "medium", "high")


@dataclass
class Task:
    id: int | None
    project_id: int
    title: str
    description: str | None
    assigned_to: int | None
    status: str
    priority: str
    due_date: date | None
    created_by: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_overdue(self, today: date) -> bool:
        """Return ``True`` when the due date passed and the task is still open."""

        return (
            self.due_date is not None
            and self.due_date < today
            and self.status != TASK_STATUS_COMPLETED
        )


__all__ = [
    "Task",
    "TASK_STATUSES",
    "TASK_PRIORITIES",
    "TASK_STATUS_TODO",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_COMPLETED",
]
