"""Schemas for the activity feed and dashboard."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityActorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None
    full_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


class ActivityRead(BaseModel):
    """An activity record together with its rendered sentence."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_id: int | None
    action: str
    entity_type: str
    entity_id: str
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None
    actor: ActivityActorRead | None = None
    description: str


class ActivityStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    today: int
    this_week: int
    by_action: dict[str, int]
    by_entity: dict[str, int]


class DashboardRead(BaseModel):
    project_count: int
    task_count: int
    completed_task_count: int
    overdue_task_count: int
    total_spent: float
    total_budget: float
    completion_percentage: int
    budget_percentage: int
    recent_activities: list[ActivityRead]


__all__ = ["ActivityActorRead", "ActivityRead", "ActivityStatsRead", "DashboardRead"]
