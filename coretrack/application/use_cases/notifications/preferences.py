"""Use cases for notification delivery preferences."""

from __future__ import annotations

import logging
import re
from typing import Any

from sqlalchemy.orm import Session

from coretrack.domain.entities import (
    DIGEST_FREQUENCIES,
    NOTIFICATION_CHANNELS,
    NotificationPreferences,
    User,
)
from coretrack.infrastructure.repositories import NotificationPreferencesRepository

from coretrack.application.use_cases.activity import record_activity

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


def get_notification_preferences(
    session: Session, *, user_id: int
) -> NotificationPreferences | None:
    """Return the stored preferences, ``None`` when the user has no row."""

    return NotificationPreferencesRepository(session).get(user_id)


def ensure_default_preferences(session: Session, *, user_id: int) -> NotificationPreferences:
    repository = NotificationPreferencesRepository(session)
    existing = repository.get(user_id)
    if existing is not None:
        return existing
    return repository.upsert(user_id)


def _validate_changes(changes: dict[str, Any]) -> dict[str, Any]:
    cleaned = dict(changes)
    frequency = cleaned.get("digest_frequency")
    if frequency is not None and frequency not in DIGEST_FREQUENCIES:
        raise ValueError(
            "digest_frequency must be one of: " + ", ".join(DIGEST_FREQUENCIES)
        )
    for key in ("quiet_hours_start", "quiet_hours_end"):
        value = cleaned.get(key)
        if value in ("", None):
            if key in cleaned:
                cleaned[key] = None
            continue
        if not _TIME_PATTERN.match(str(value)):
            raise ValueError(f"{key} must use the HH:MM format")
    if "timezone" in cleaned and not (cleaned["timezone"] or "").strip():
        raise ValueError("timezone cannot be empty")
    return cleaned


def update_notification_preferences(
    session: Session, *, user: User, **changes: Any
) -> NotificationPreferences:
    """Upsert the preference row of ``user`` and log the change."""

    cleaned = _validate_changes(changes)
    preferences = NotificationPreferencesRepository(session).upsert(user.id, **cleaned)
    record_activity(
        session,
        user,
        "preferences_updated",
        "notification",
        preferences.id,
        {"changed_fields": sorted(cleaned)},
    )
    return preferences


def should_send_notification(
    session: Session, *, user_id: int, category: str, channel: str
) -> bool:
    """Return whether ``channel`` is enabled for ``category``.

    Fails closed: no preference row, an unknown channel or an unknown flag
    all mean ``False``.
    """

    if channel not in NOTIFICATION_CHANNELS:
        logger.warning("Unknown notification channel '%s'", channel)
        return False
    preferences = NotificationPreferencesRepository(session).get(user_id)
    if preferences is None:
        return False
    return preferences.flag_for(channel, category)


__all__ = [
    "ensure_default_preferences",
    "get_notification_preferences",
    "should_send_notification",
    "update_notification_preferences",
]
