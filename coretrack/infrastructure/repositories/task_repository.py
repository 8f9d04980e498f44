"""Persistence layer for tasks."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from coretrack.domain.entities import Task
from coretrack.infrastructure.models import ProjectModel, TaskModel
from coretrack.utils import ensure_app_timezone


class TaskRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        project_id: int | None = None,
        status: str | None = None,
        priority: str | None = None,
        assigned_to: int | None = None,
        visible_to: int | None = None,
        search: str | None = None,
    ) -> Sequence[Task]:
        """Return tasks matching the filters.

        ``visible_to`` restricts the result to tasks the user created, is
        assigned to, or that belong to one of the user's projects.
        """

        query = self.session.query(TaskModel)
        if project_id is not None:
            query = query.filter(TaskModel.project_id == project_id)
        if status:
            query = query.filter(TaskModel.status == status)
        if priority:
            query = query.filter(TaskModel.priority == priority)
        if assigned_to is not None:
            query = query.filter(TaskModel.assigned_to == assigned_to)
        if visible_to is not None:
            owned_projects = self.session.query(ProjectModel.id).filter(
                ProjectModel.created_by == visible_to
            )
            query = query.filter(
                or_(
                    TaskModel.created_by == visible_to,
                    TaskModel.assigned_to == visible_to,
                    TaskModel.project_id.in_(owned_projects),
                )
            )
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(TaskModel.title).like(pattern),
                    func.lower(func.coalesce(TaskModel.description, "")).like(pattern),
                )
            )
        query = query.order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, task_id: int) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def create(self, task: Task) -> Task:
        model = TaskModel()
        self._apply_entity_to_model(model, task)
        model.created_by = task.created_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        model = self.session.get(TaskModel, task.id)
        if model is None:
            msg = f"Task with id {task.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, task_id: int) -> bool:
        model = self.session.get(TaskModel, task_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: TaskModel, task: Task) -> None:
        model.project_id = task.project_id
        model.title = task.title
        model.description = task.description
        model.assigned_to = task.assigned_to
        model.status = task.status
        model.priority = task.priority
        model.due_date = task.due_date

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            project_id=model.project_id,
            title=model.title,
            description=model.description,
            assigned_to=model.assigned_to,
            status=model.status,
            priority=model.priority,
            due_date=model.due_date,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["TaskRepository"]
