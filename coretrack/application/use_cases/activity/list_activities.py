"""Read helpers for the activity feed."""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.orm import Session

from coretrack.domain.entities import ActivityRecord, ActivityStats, normalize_action
from coretrack.infrastructure.repositories import ActivityRepository
from coretrack.utils import now_in_app_timezone, start_of_today

from .format_activity import format_activity

# Upper bound of rows scanned when filtering by the rendered description.
SEARCH_SCAN_LIMIT = 500


def list_activities(
    session: Session,
    *,
    actor_id: int | None = None,
    action: str | None = None,
    entity_type: str | None = None,
    search: str | None = None,
    limit: int = 50,
) -> list[ActivityRecord]:
    """Return the newest activities first, each joined with its actor."""

    repository = ActivityRepository(session)
    normalized_action = normalize_action(action) if action else None
    normalized_entity = entity_type.strip().lower() if entity_type else None

    term = (search or "").strip().lower()
    if not term:
        return list(
            repository.list(
                actor_id=actor_id,
                action=normalized_action,
                entity_type=normalized_entity,
                limit=limit,
            )
        )

    candidates = repository.list(
        actor_id=actor_id,
        action=normalized_action,
        entity_type=normalized_entity,
        limit=SEARCH_SCAN_LIMIT,
    )
    matches = [record for record in candidates if term in format_activity(record).lower()]
    return matches[:limit]


def get_activity_stats(session: Session, *, actor_id: int | None = None) -> ActivityStats:
    repository = ActivityRepository(session)
    now = now_in_app_timezone()
    return ActivityStats(
        total=repository.count(actor_id=actor_id),
        today=repository.count(actor_id=actor_id, since=start_of_today()),
        this_week=repository.count(actor_id=actor_id, since=now - timedelta(days=7)),
        by_action=repository.count_by("action", actor_id=actor_id),
        by_entity=repository.count_by("entity_type", actor_id=actor_id),
    )


__all__ = ["SEARCH_SCAN_LIMIT", "get_activity_stats", "list_activities"]
