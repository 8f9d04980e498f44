"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from coretrack.domain.entities import Role, User
from coretrack.infrastructure.models import UserModel
from coretrack.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self, skip: int = 0, limit: int = 100, *, search: str | None = None
    ) -> Sequence[User]:
        query = self.session.query(UserModel).options(joinedload(UserModel.role))
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(UserModel.email).like(pattern),
                    func.lower(func.coalesce(UserModel.full_name, "")).like(pattern),
                )
            )
        query = query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        return [self._to_entity(model) for model in query.offset(skip).limit(limit).all()]

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self._get_model(id=user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int) -> bool:
        model = self._get_model(id=user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model(self, **filters) -> UserModel | None:
        query = self.session.query(UserModel).options(joinedload(UserModel.role))
        return query.filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=Role(id=model.role.id, name=model.role.name, alias=model.role.alias),
            full_name=model.full_name,
            email=model.email,
            password=model.password,
            bio=model.bio,
            phone=model.phone,
            company=model.company,
            website=model.website,
            avatar_url=model.avatar_url,
            two_factor_enabled=bool(model.two_factor_enabled),
            email_verified=bool(model.email_verified),
            token_version=model.token_version or 0,
            is_active=model.is_active,
            last_login=ensure_app_timezone(model.last_login),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields and user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        model.role_id = user.role.id
        model.full_name = user.full_name
        model.email = user.email
        model.password = user.password
        model.bio = user.bio
        model.phone = user.phone
        model.company = user.company
        model.website = user.website
        model.avatar_url = user.avatar_url
        model.two_factor_enabled = user.two_factor_enabled
        model.email_verified = user.email_verified
        model.token_version = user.token_version
        model.is_active = user.is_active
        model.last_login = ensure_app_naive_datetime(user.last_login)


__all__ = ["UserRepository"]
