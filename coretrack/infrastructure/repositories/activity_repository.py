"""Persistence helpers for the activity log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from coretrack.domain.entities import ActivityActor, ActivityRecord
from coretrack.infrastructure.models import ActivityModel
from coretrack.utils import ensure_app_naive_datetime, ensure_app_timezone


class ActivityRepository:
    """Append and query :class:`ActivityRecord` rows.

    The log is append-only, so no update or delete helpers are exposed.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: str,
        details: dict[str, Any] | None = None,
    ) -> ActivityRecord:
        model = ActivityModel(
            user_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=dict(details or {}),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list(
        self,
        *,
        actor_id: int | None = None,
        action: str | None = None,
        entity_type: str | None = None,
        limit: int | None = 50,
    ) -> Sequence[ActivityRecord]:
        query = self._filtered(actor_id=actor_id, action=action, entity_type=entity_type)
        query = query.order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count(
        self, *, actor_id: int | None = None, since: datetime | None = None
    ) -> int:
        query = self.session.query(func.count(ActivityModel.id))
        if actor_id is not None:
            query = query.filter(ActivityModel.user_id == actor_id)
        if since is not None:
            query = query.filter(
                ActivityModel.created_at >= ensure_app_naive_datetime(since)
            )
        return int(query.scalar() or 0)

    def count_by(self, column: str, *, actor_id: int | None = None) -> dict[str, int]:
        """Group counts by ``action`` or ``entity_type``."""

        if column not in {"action", "entity_type"}:
            raise ValueError(f"Cannot group activities by '{column}'")
        field = getattr(ActivityModel, column)
        query = self.session.query(field, func.count(ActivityModel.id))
        if actor_id is not None:
            query = query.filter(ActivityModel.user_id == actor_id)
        return {key: int(total) for key, total in query.group_by(field).all()}

    def _filtered(
        self,
        *,
        actor_id: int | None,
        action: str | None,
        entity_type: str | None,
    ):
        query = self.session.query(ActivityModel)
        if actor_id is not None:
            query = query.filter(ActivityModel.user_id == actor_id)
        if action:
            query = query.filter(ActivityModel.action == action)
        if entity_type:
            query = query.filter(ActivityModel.entity_type == entity_type)
        return query

    @staticmethod
    def _to_entity(model: ActivityModel) -> ActivityRecord:
        actor = None
        if model.actor is not None:
            actor = ActivityActor(
                id=model.actor.id,
                full_name=model.actor.full_name,
                email=model.actor.email,
                avatar_url=model.actor.avatar_url,
            )
        return ActivityRecord(
            id=model.id,
            actor_id=model.user_id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            details=dict(model.details or {}),
            created_at=ensure_app_timezone(model.created_at),
            actor=actor,
        )


__all__ = ["ActivityRepository"]
