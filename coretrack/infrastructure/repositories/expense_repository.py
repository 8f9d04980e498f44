"""Persistence layer for expenses."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from coretrack.domain.entities import Expense
from coretrack.infrastructure.models import ExpenseModel, ProjectModel
from coretrack.utils import ensure_app_timezone


class ExpenseRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        project_id: int | None = None,
        project_owner: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ) -> Sequence[Expense]:
        query = self.session.query(ExpenseModel)
        if project_id is not None:
            query = query.filter(ExpenseModel.project_id == project_id)
        if project_owner is not None:
            query = query.join(ProjectModel, ExpenseModel.project_id == ProjectModel.id)
            query = query.filter(ProjectModel.created_by == project_owner)
        if date_from is not None:
            query = query.filter(ExpenseModel.expense_date >= date_from)
        if date_to is not None:
            query = query.filter(ExpenseModel.expense_date <= date_to)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                func.lower(func.coalesce(ExpenseModel.description, "")).like(pattern)
            )
        query = query.order_by(ExpenseModel.expense_date.desc(), ExpenseModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, expense_id: int) -> Expense | None:
        model = self.session.get(ExpenseModel, expense_id)
        return self._to_entity(model) if model else None

    def total_for_project(self, project_id: int, *, exclude_id: int | None = None) -> float:
        """Sum of the project's expenses, optionally ignoring one row."""

        query = self.session.query(func.coalesce(func.sum(ExpenseModel.amount), 0)).filter(
            ExpenseModel.project_id == project_id
        )
        if exclude_id is not None:
            query = query.filter(ExpenseModel.id != exclude_id)
        return float(query.scalar() or 0)

    def total(self, *, project_owner: int | None = None) -> float:
        query = self.session.query(func.coalesce(func.sum(ExpenseModel.amount), 0))
        if project_owner is not None:
            query = query.join(ProjectModel, ExpenseModel.project_id == ProjectModel.id)
            query = query.filter(ProjectModel.created_by == project_owner)
        return float(query.scalar() or 0)

    def create(self, expense: Expense) -> Expense:
        model = ExpenseModel()
        self._apply_entity_to_model(model, expense)
        model.created_by = expense.created_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, expense: Expense) -> Expense:
        model = self.session.get(ExpenseModel, expense.id)
        if model is None:
            msg = f"Expense with id {expense.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, expense)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, expense_id: int) -> bool:
        model = self.session.get(ExpenseModel, expense_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: ExpenseModel, expense: Expense) -> None:
        model.project_id = expense.project_id
        model.task_id = expense.task_id
        model.amount = expense.amount
        model.description = expense.description
        model.expense_date = expense.expense_date

    @staticmethod
    def _to_entity(model: ExpenseModel) -> Expense:
        return Expense(
            id=model.id,
            project_id=model.project_id,
            task_id=model.task_id,
            amount=model.amount,
            description=model.description,
            expense_date=model.expense_date,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ExpenseRepository"]
