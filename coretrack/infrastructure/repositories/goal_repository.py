"""Persistence layer for goals."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from coretrack.domain.entities import Goal
from coretrack.infrastructure.models import GoalModel
from coretrack.utils import ensure_app_timezone


class GoalRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self, *, created_by: int | None = None, project_id: int | None = None
    ) -> Sequence[Goal]:
        query = self.session.query(GoalModel)
        if created_by is not None:
            query = query.filter(GoalModel.created_by == created_by)
        if project_id is not None:
            query = query.filter(GoalModel.project_id == project_id)
        query = query.order_by(GoalModel.created_at.desc(), GoalModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, goal_id: int) -> Goal | None:
        model = self.session.get(GoalModel, goal_id)
        return self._to_entity(model) if model else None

    def create(self, goal: Goal) -> Goal:
        model = GoalModel()
        self._apply_entity_to_model(model, goal)
        model.created_by = goal.created_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, goal: Goal) -> Goal:
        model = self.session.get(GoalModel, goal.id)
        if model is None:
            msg = f"Goal with id {goal.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, goal)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, goal_id: int) -> bool:
        model = self.session.get(GoalModel, goal_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: GoalModel, goal: Goal) -> None:
        model.project_id = goal.project_id
        model.title = goal.title
        model.description = goal.description
        model.target_value = goal.target_value
        model.current_value = goal.current_value

    @staticmethod
    def _to_entity(model: GoalModel) -> Goal:
        return Goal(
            id=model.id,
            project_id=model.project_id,
            title=model.title,
            description=model.description,
            target_value=model.target_value,
            current_value=model.current_value,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["GoalRepository"]
