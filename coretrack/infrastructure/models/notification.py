"""SQLAlchemy models for persisted notifications and delivery preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression

from coretrack.infrastructure.database import Base
from coretrack.utils import now_in_app_naive_datetime

from ._types import json_document


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="info")
    category = Column(String(20), nullable=False)
    read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    action_url = Column(String(512), nullable=True)
    action_text = Column(String(120), nullable=True)
    # ``metadata`` is reserved on declarative classes.
    payload = Column("metadata", json_document, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True)


class NotificationPreferencesModel(Base):
    __tablename__ = "notification_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    email_project_updates = Column(Boolean, nullable=False, default=True)
    email_task_assignments = Column(Boolean, nullable=False, default=True)
    email_goal_reminders = Column(Boolean, nullable=False, default=True)
    email_expense_alerts = Column(Boolean, nullable=False, default=True)
    email_weekly_reports = Column(Boolean, nullable=False, default=True)
    email_system_updates = Column(Boolean, nullable=False, default=True)
    push_project_updates = Column(Boolean, nullable=False, default=True)
    push_task_assignments = Column(Boolean, nullable=False, default=True)
    push_goal_reminders = Column(Boolean, nullable=False, default=True)
    push_expense_alerts = Column(Boolean, nullable=False, default=True)
    push_system_updates = Column(Boolean, nullable=False, default=True)
    digest_frequency = Column(String(10), nullable=False, default="weekly")
    quiet_hours_start = Column(String(5), nullable=True)
    quiet_hours_end = Column(String(5), nullable=True)
    timezone = Column(String(64), nullable=False, default="UTC")
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["NotificationModel", "NotificationPreferencesModel"]
