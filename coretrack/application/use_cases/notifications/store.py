"""Use cases for the per-user notification inbox."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from coretrack.domain.entities import NOTIFICATION_CATEGORIES, NOTIFICATION_TYPES, Notification
from coretrack.domain.exceptions import NotFoundError
from coretrack.infrastructure.notifications import dispatch_notification
from coretrack.infrastructure.repositories import NotificationRepository
from coretrack.infrastructure.repositories.notification_repository import (
    STATUS_ALL,
    STATUS_READ,
    STATUS_UNREAD,
)

NOTIFICATION_STATUSES: tuple[str, ...] = (STATUS_ALL, STATUS_READ, STATUS_UNREAD)


def _ensure_choice(value: str, allowed: tuple[str, ...], label: str) -> str:
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise ValueError(f"Invalid notification {label} '{value}'")
    return normalized


def create_notification(
    session: Session,
    *,
    user_id: int,
    title: str,
    message: str,
    category: str,
    type: str = "info",
    action_url: str | None = None,
    action_text: str | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    """Store an unread notification for ``user_id`` and push it to open sockets."""

    if not title.strip():
        raise ValueError("Notification title is required")
    notification = Notification(
        id=None,
        user_id=user_id,
        title=title.strip(),
        message=message,
        category=_ensure_choice(category, NOTIFICATION_CATEGORIES, "category"),
        type=_ensure_choice(type, NOTIFICATION_TYPES, "type"),
        read=False,
        action_url=action_url,
        action_text=action_text,
        metadata=dict(metadata or {}),
    )
    saved = NotificationRepository(session).create(notification)
    dispatch_notification(saved)
    return saved


def list_notifications(
    session: Session,
    *,
    user_id: int,
    limit: int = 50,
    status: str = STATUS_ALL,
    category: str | None = None,
    type: str | None = None,
    search: str | None = None,
) -> list[Notification]:
    return list(
        NotificationRepository(session).list_for_user(
            user_id,
            status=_ensure_choice(status, NOTIFICATION_STATUSES, "status"),
            category=category,
            type_=type,
            search=(search or "").strip() or None,
            limit=limit,
        )
    )


def get_unread_count(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    """Mark one notification as read. Calling it again returns the same record."""

    notification = NotificationRepository(session).mark_read(
        notification_id, user_id=user_id
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


def mark_all_notifications_read(session: Session, *, user_id: int) -> list[Notification]:
    """Mark every unread notification as read and return only those rows."""

    return NotificationRepository(session).mark_all_read(user_id)


def delete_notification(session: Session, *, notification_id: int, user_id: int) -> None:
    if not NotificationRepository(session).delete(notification_id, user_id=user_id):
        raise NotFoundError("Notification not found")


__all__ = [
    "NOTIFICATION_STATUSES",
    "create_notification",
    "delete_notification",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
