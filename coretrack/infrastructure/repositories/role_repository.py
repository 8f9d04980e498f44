"""Persistence layer for roles data."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from coretrack.domain.entities import Role
from coretrack.infrastructure.models import RoleModel


class RoleRepository:
    """Provide read access to roles stored in the database."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, role_id: int) -> Role | None:
        model = self.session.get(RoleModel, role_id)
        return self._to_entity(model) if model else None

    def get_by_alias(self, alias: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(func.lower(RoleModel.alias) == alias.lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list(self) -> list[Role]:
        models = self.session.query(RoleModel).order_by(RoleModel.id).all()
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["RoleRepository"]
