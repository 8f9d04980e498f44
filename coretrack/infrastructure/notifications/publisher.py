"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from coretrack.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery.

    Delivery is never awaited by the caller: on the event loop a task is
    created, and from an AnyIO worker thread the task is created on the loop
    that owns the thread.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task] = set()

    def dispatch(self, notification: Notification) -> None:
        if not self._manager.has_connections(notification.user_id):
            return
        message = {"type": "notification", "data": self._serialize(notification)}
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._spawn, notification.user_id, message)
            except RuntimeError:
                logger.warning(
                    "No event loop available to push notification %s", notification.id
                )
        else:
            self._spawn(notification.user_id, message)

    def _spawn(self, user_id: int, message: dict[str, Any]) -> None:
        task = asyncio.get_running_loop().create_task(
            self._manager.send_to_user(user_id, message)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        return {
            "id": notification.id,
            "user_id": notification.user_id,
            "title": notification.title,
            "message": notification.message,
            "type": notification.type,
            "category": notification.category,
            "read": notification.read,
            "action_url": notification.action_url,
            "action_text": notification.action_text,
            "metadata": notification.metadata or {},
            "created_at": notification.created_at.isoformat()
            if notification.created_at
            else None,
            "updated_at": notification.updated_at.isoformat()
            if notification.updated_at
            else None,
        }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(notification)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return NotificationPublisher._serialize(notification)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "serialize_notification",
]
