"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

NotificationCategory = Literal["project", "task", "goal", "expense", "system"]
NotificationType = Literal["info", "success", "warning", "error"]


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    message: str
    type: str
    category: str
    read: bool
    action_url: str | None = None
    action_text: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime | None = None


class NotificationCreate(BaseModel):
    """Payload for the administrative direct-create endpoint."""

    user_id: int
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    category: NotificationCategory
    type: NotificationType = "info"
    action_url: str | None = Field(default=None, max_length=512)
    action_text: str | None = Field(default=None, max_length=120)
    metadata: dict[str, Any] = Field(default_factory=dict)
    respect_preferences: bool = False


class NotificationSendResult(BaseModel):
    notification: NotificationRead | None
    skipped: bool
    emailed: bool


class UnreadCountRead(BaseModel):
    count: int


class NotificationPreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    email_project_updates: bool
    email_task_assignments: bool
    email_goal_reminders: bool
    email_expense_alerts: bool
    email_weekly_reports: bool
    email_system_updates: bool
    push_project_updates: bool
    push_task_assignments: bool
    push_goal_reminders: bool
    push_expense_alerts: bool
    push_system_updates: bool
    digest_frequency: str
    quiet_hours_start: str | None
    quiet_hours_end: str | None
    timezone: str
    created_at: datetime | None
    updated_at: datetime | None


class NotificationPreferencesUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email_project_updates: bool | None = None
    email_task_assignments: bool | None = None
    email_goal_reminders: bool | None = None
    email_expense_alerts: bool | None = None
    email_weekly_reports: bool | None = None
    email_system_updates: bool | None = None
    push_project_updates: bool | None = None
    push_task_assignments: bool | None = None
    push_goal_reminders: bool | None = None
    push_expense_alerts: bool | None = None
    push_system_updates: bool | None = None
    digest_frequency: Literal["daily", "weekly", "never"] | None = None
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None
    timezone: str | None = Field(default=None, max_length=64)


__all__ = [
    "NotificationCreate",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "NotificationSendResult",
    "UnreadCountRead",
]
