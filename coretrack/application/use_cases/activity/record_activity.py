"""Best-effort writer for the activity log."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coretrack.domain.entities import User, ensure_supported_activity
from coretrack.infrastructure.repositories import ActivityRepository

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_json_safe(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def record_activity(
    session: Session,
    actor: User | None,
    action: str,
    entity_type: str,
    entity_id: Any,
    details: Mapping[str, Any] | None = None,
) -> None:
    """Append one activity as ``actor``. Never raises.

    A missing actor, an action outside the vocabulary of ``entity_type`` or a
    database failure is logged and the write is dropped.
    """

    if actor is None or actor.id is None:
        logger.warning(
            "Skipping activity %s/%s for %s: no authenticated actor",
            entity_type,
            action,
            entity_id,
        )
        return

    try:
        normalized_action, normalized_entity = ensure_supported_activity(
            action, entity_type
        )
    except ValueError as exc:
        logger.warning("Dropping activity for %s: %s", entity_id, exc)
        return

    try:
        ActivityRepository(session).create(
            actor_id=actor.id,
            action=normalized_action,
            entity_type=normalized_entity,
            entity_id=str(entity_id),
            details=_json_safe(details or {}),
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Failed to record activity %s/%s for %s",
            normalized_entity,
            normalized_action,
            entity_id,
        )


__all__ = ["record_activity"]
