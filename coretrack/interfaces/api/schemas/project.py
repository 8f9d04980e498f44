"""Schemas for projects, tasks, goals and expenses."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ProjectStatus = Literal["active", "completed", "on-hold", "cancelled"]
TaskStatus = Literal["todo", "in_progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    budget: float | None = Field(default=None, ge=0)
    deadline: date | None = None
    status: ProjectStatus = "active"


class ProjectUpdate(BaseModel):
    """Partial update; only the fields sent are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    budget: float | None = Field(default=None, ge=0)
    deadline: date | None = None
    status: ProjectStatus | None = None


class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    budget: float | None
    deadline: date | None
    status: str
    created_by: int | None
    created_at: datetime | None
    updated_at: datetime | None


class ProjectDetailRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project: ProjectRead
    total_spent: float
    remaining_budget: float | None
    budget_percentage: float | None
    budget_display_percentage: float
    task_count: int
    completed_task_count: int
    overdue_task_count: int


class TaskCreate(BaseModel):
    project_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    assigned_to: int | None = None
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: date | None = None


class TaskUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    assigned_to: int | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    description: str | None
    assigned_to: int | None
    status: str
    priority: str
    due_date: date | None
    created_by: int | None
    created_at: datetime | None
    updated_at: datetime | None


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    target_value: float = Field(..., gt=0)
    current_value: float = Field(default=0, ge=0)
    project_id: int | None = None


class GoalUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    target_value: float | None = Field(default=None, gt=0)
    project_id: int | None = None


class GoalProgressUpdate(BaseModel):
    mode: Literal["set", "increment"] = "set"
    value: float


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int | None
    title: str
    description: str | None
    target_value: float
    current_value: float
    progress_percentage: int
    created_by: int | None
    created_at: datetime | None
    updated_at: datetime | None


class ExpenseCreate(BaseModel):
    project_id: int
    amount: float = Field(..., gt=0)
    description: str | None = Field(default=None, max_length=500)
    expense_date: date | None = None
    task_id: int | None = None


class ExpenseUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: float | None = Field(default=None, gt=0)
    description: str | None = Field(default=None, max_length=500)
    expense_date: date | None = None
    task_id: int | None = None


class ExpenseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    task_id: int | None
    amount: float
    description: str | None
    expense_date: date
    created_by: int | None
    created_at: datetime | None
    updated_at: datetime | None


class BudgetCheckRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    budget: float | None
    total: float
    percentage: float | None
    display_percentage: float
    over_budget: bool
    warning: str | None


class BudgetPreviewRequest(BaseModel):
    project_id: int
    amount: float = Field(..., gt=0)
    expense_id: int | None = None


class ExpenseWithBudgetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    expense: ExpenseRead
    budget: BudgetCheckRead


__all__ = [
    "BudgetCheckRead",
    "BudgetPreviewRequest",
    "ExpenseCreate",
    "ExpenseRead",
    "ExpenseUpdate",
    "ExpenseWithBudgetRead",
    "GoalCreate",
    "GoalProgressUpdate",
    "GoalRead",
    "GoalUpdate",
    "ProjectCreate",
    "ProjectDetailRead",
    "ProjectRead",
    "ProjectUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
