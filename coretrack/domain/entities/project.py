"""Domain entity representing a project."""

from dataclasses import dataclass
from datetime import date, datetime

PROJECT_STATUS_ACTIVE = "active"
PROJECT_STATUS_COMPLETED = "completed"
PROJECT_STATUS_ON_HOLD = "on-hold"
PROJECT_STATUS_CANCELLED = "cancelled"
PROJECT_STATUSES: tuple[str, ...] = (
    PROJECT_STATUS_ACTIVE,
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_ON_HOLD,
    PROJECT_STATUS_CANCELLED,
)


@dataclass
class Project:
    id: int | None
    title: str
    description: str | None
    budget: float | None
    deadline: date | None
    status: str
    created_by: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "Project",
    "PROJECT_STATUSES",
    "PROJECT_STATUS_ACTIVE",
    "PROJECT_STATUS_COMPLETED",
    "PROJECT_STATUS_ON_HOLD",
    "PROJECT_STATUS_CANCELLED",
]
