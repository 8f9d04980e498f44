"""Persistence layer for projects."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from coretrack.domain.entities import Project
from coretrack.infrastructure.models import ProjectModel
from coretrack.utils import ensure_app_timezone


class ProjectRepository:
    """Provide CRUD operations for :class:`Project` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        created_by: int | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> Sequence[Project]:
        query = self.session.query(ProjectModel)
        if created_by is not None:
            query = query.filter(ProjectModel.created_by == created_by)
        if status:
            query = query.filter(ProjectModel.status == status)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(ProjectModel.title).like(pattern),
                    func.lower(func.coalesce(ProjectModel.description, "")).like(pattern),
                )
            )
        query = query.order_by(ProjectModel.created_at.desc(), ProjectModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, project_id: int) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def count(self, *, created_by: int | None = None) -> int:
        query = self.session.query(func.count(ProjectModel.id))
        if created_by is not None:
            query = query.filter(ProjectModel.created_by == created_by)
        return int(query.scalar() or 0)

    def total_budget(self, *, created_by: int | None = None) -> float:
        query = self.session.query(func.coalesce(func.sum(ProjectModel.budget), 0))
        if created_by is not None:
            query = query.filter(ProjectModel.created_by == created_by)
        return float(query.scalar() or 0)

    def create(self, project: Project) -> Project:
        model = ProjectModel()
        self._apply_entity_to_model(model, project)
        model.created_by = project.created_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, project: Project) -> Project:
        model = self.session.get(ProjectModel, project.id)
        if model is None:
            msg = f"Project with id {project.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, project)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, project_id: int) -> bool:
        model = self.session.get(ProjectModel, project_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: ProjectModel, project: Project) -> None:
        model.title = project.title
        model.description = project.description
        model.budget = project.budget
        model.deadline = project.deadline
        model.status = project.status

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            title=model.title,
            description=model.description,
            budget=model.budget,
            deadline=model.deadline,
            status=model.status,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ProjectRepository"]
