"""Endpoints exposing the activity feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import (
    format_activity,
    get_activity_stats,
    list_activities,
)
from coretrack.domain.entities import ActivityRecord, User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.schemas import ActivityRead, ActivityStatsRead

router = APIRouter(prefix="/activity", tags=["activity"])


def activity_to_schema(record: ActivityRecord) -> ActivityRead:
    return ActivityRead.model_validate(
        {
            "id": record.id,
            "actor_id": record.actor_id,
            "action": record.action,
            "entity_type": record.entity_type,
            "entity_id": record.entity_id,
            "details": record.details or {},
            "created_at": record.created_at,
            "actor": record.actor,
            "description": format_activity(record),
        }
    )


def _scope(user: User, actor_id: int | None) -> int | None:
    # Non-admins only ever see their own activity.
    if user.is_admin():
        return actor_id
    return user.id


@router.get("/", response_model=list[ActivityRead])
def read_activities(
    actor_id: int | None = None,
    action: str | None = None,
    entity_type: str | None = None,
    search: str | None = None,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ActivityRead]:
    """Return the newest activities first with a readable description."""

    records = list_activities(
        db,
        actor_id=_scope(current_user, actor_id),
        action=action,
        entity_type=entity_type,
        search=search,
        limit=limit,
    )
    return [activity_to_schema(record) for record in records]


@router.get("/stats", response_model=ActivityStatsRead)
def read_activity_stats(
    actor_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ActivityStatsRead:
    stats = get_activity_stats(db, actor_id=_scope(current_user, actor_id))
    return ActivityStatsRead.model_validate(stats)


__all__ = ["activity_to_schema", "router"]
