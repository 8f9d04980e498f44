"""Preference-gated delivery of notifications."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coretrack.domain.entities import NotificationDispatchResult
from coretrack.infrastructure.email import send_notification_email
from coretrack.infrastructure.repositories import UserRepository

from .preferences import should_send_notification
from .store import create_notification

logger = logging.getLogger(__name__)


def send_notification(
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
) -> NotificationDispatchResult:
    """Store and push the notification when the recipient opted in.

    The ``push`` preference decides whether anything is stored; the ``email``
    preference additionally mirrors it by email.
    """

    if not should_send_notification(
        session, user_id=user_id, category=category, channel="push"
    ):
        logger.info(
            "Notification '%s' for user %s skipped by preferences", title, user_id
        )
        return NotificationDispatchResult(notification=None, skipped=True)

    notification = create_notification(
        session,
        user_id=user_id,
        title=title,
        message=message,
        category=category,
        type=type,
        action_url=action_url,
        action_text=action_text,
        metadata=metadata,
    )

    emailed = False
    if should_send_notification(
        session, user_id=user_id, category=category, channel="email"
    ):
        recipient = UserRepository(session).get(user_id)
        if recipient is not None:
            emailed = send_notification_email(
                recipient.email,
                title,
                message,
                action_url=action_url,
                action_text=action_text,
            )
            if not emailed:
                logger.warning(
                    "Notification email for user %s could not be sent", user_id
                )
    return NotificationDispatchResult(notification=notification, emailed=emailed)


def notify_safely(session: Session, **kwargs: Any) -> NotificationDispatchResult | None:
    """Call :func:`send_notification` without letting failures escape."""

    try:
        return send_notification(session, **kwargs)
    except (SQLAlchemyError, ValueError):
        session.rollback()
        logger.exception(
            "Failed to deliver notification to user %s", kwargs.get("user_id")
        )
        return None


__all__ = ["notify_safely", "send_notification"]
