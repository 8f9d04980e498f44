"""Domain entity representing an expense booked against a project."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class Expense:
    id: int | None
    project_id: int
    task_id: int | None
    amount: float
    description: str | None
    expense_date: date
    created_by: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Expense"]
