"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from coretrack.domain.entities import Notification
from coretrack.infrastructure.models import NotificationModel
from coretrack.utils import ensure_app_timezone, now_in_app_naive_datetime

STATUS_ALL = "all"
STATUS_READ = "read"
STATUS_UNREAD = "unread"


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        status: str = STATUS_ALL,
        category: str | None = None,
        type_: str | None = None,
        search: str | None = None,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if status == STATUS_READ:
            query = query.filter(NotificationModel.read.is_(True))
        elif status == STATUS_UNREAD:
            query = query.filter(NotificationModel.read.is_(False))
        if category:
            query = query.filter(NotificationModel.category == category)
        if type_:
            query = query.filter(NotificationModel.type == type_)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(NotificationModel.title).like(pattern),
                    func.lower(NotificationModel.message).like(pattern),
                )
            )
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        total = (
            self.session.query(func.count(NotificationModel.id))
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .scalar()
        )
        return max(int(total or 0), 0)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            type=notification.type,
            category=notification.category,
            read=notification.read,
            action_url=notification.action_url,
            action_text=notification.action_text,
            payload=dict(notification.metadata or {}),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_read(self, notification_id: int, *, user_id: int) -> Notification | None:
        """Flag one notification as read. Already-read rows are left untouched."""

        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            return None
        if not model.read:
            model.read = True
            model.updated_at = now_in_app_naive_datetime()
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_read(self, user_id: int) -> list[Notification]:
        """Flag every unread notification as read and return the rows changed."""

        models = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .all()
        )
        if not models:
            return []
        timestamp = now_in_app_naive_datetime()
        for model in models:
            model.read = True
            model.updated_at = timestamp
        self.session.commit()
        return [self._to_entity(model) for model in models]

    def delete(self, notification_id: int, *, user_id: int) -> bool:
        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model(self, notification_id: int, *, user_id: int) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            category=model.category,
            type=model.type,
            read=bool(model.read),
            action_url=model.action_url,
            action_text=model.action_text,
            metadata=dict(model.payload or {}),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository", "STATUS_ALL", "STATUS_READ", "STATUS_UNREAD"]
