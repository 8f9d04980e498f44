"""Persistence helpers for per-user notification preferences."""

from __future__ import annotations

from dataclasses import fields

from sqlalchemy.orm import Session

from coretrack.domain.entities import NotificationPreferences
from coretrack.infrastructure.models import NotificationPreferencesModel
from coretrack.utils import ensure_app_timezone

_MUTABLE_FIELDS: tuple[str, ...] = tuple(
    item.name
    for item in fields(NotificationPreferences)
    if item.name not in {"id", "user_id", "created_at", "updated_at"}
)


class NotificationPreferencesRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> NotificationPreferences | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def upsert(self, user_id: int, **changes) -> NotificationPreferences:
        """Create the row with defaults when missing, then apply ``changes``."""

        unknown = set(changes) - set(_MUTABLE_FIELDS)
        if unknown:
            raise ValueError(
                "Unknown notification preference(s): " + ", ".join(sorted(unknown))
            )
        model = self._get_model(user_id)
        if model is None:
            defaults = NotificationPreferences(id=None, user_id=user_id)
            model = NotificationPreferencesModel(user_id=user_id)
            for name in _MUTABLE_FIELDS:
                setattr(model, name, getattr(defaults, name))
        for name, value in changes.items():
            setattr(model, name, value)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: int) -> NotificationPreferencesModel | None:
        return (
            self.session.query(NotificationPreferencesModel)
            .filter(NotificationPreferencesModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationPreferencesModel) -> NotificationPreferences:
        values = {name: getattr(model, name) for name in _MUTABLE_FIELDS}
        return NotificationPreferences(
            id=model.id,
            user_id=model.user_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            **values,
        )


__all__ = ["NotificationPreferencesRepository"]
