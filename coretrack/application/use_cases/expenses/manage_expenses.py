"""Use cases for project expenses."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.budget import BudgetCheck, check_budget
from coretrack.application.use_cases.notifications import notify_safely
from coretrack.application.use_cases.projects import get_project
from coretrack.domain.entities import Expense, Project, User
from coretrack.domain.exceptions import NotFoundError, PermissionDeniedError
from coretrack.infrastructure.repositories import ExpenseRepository, ProjectRepository, TaskRepository
from coretrack.utils import format_currency, today_in_app_timezone

_UNSET: Any = object()


@dataclass(frozen=True)
class ExpenseResult:
    expense: Expense
    budget: BudgetCheck


def _validate(amount: float | None, description: str | None) -> None:
    if amount is not None and amount <= 0:
        raise ValueError("Amount must be greater than zero")
    if description is not None and not description.strip():
        raise ValueError("Expense description cannot be blank")


def _ensure_task_in_project(session: Session, task_id: int | None, project_id: int) -> None:
    if task_id is None:
        return
    task = TaskRepository(session).get(task_id)
    if task is None or task.project_id != project_id:
        raise ValueError("Task does not belong to this project")


def _notify_over_budget(session: Session, *, project: Project, check: BudgetCheck) -> None:
    if not check.over_budget or project.created_by is None:
        return
    notify_safely(
        session,
        user_id=project.created_by,
        title="Project over budget",
        message=(
            f'"{project.title}" is over budget: {format_currency(check.total)} '
            f"spent of {format_currency(project.budget)}."
        ),
        category="expense",
        type="warning",
        action_url=f"/projects/{project.id}",
        action_text="View project",
        metadata={"project_id": project.id, "total": check.total, "budget": project.budget},
    )


def get_expense(session: Session, *, user: User, expense_id: int) -> Expense:
    expense = ExpenseRepository(session).get(expense_id)
    if expense is None:
        raise NotFoundError("Expense not found")
    if not user.is_admin():
        project = ProjectRepository(session).get(expense.project_id)
        if project is None or project.created_by != user.id:
            raise PermissionDeniedError("You do not have access to this expense")
    return expense


def list_expenses(
    session: Session,
    *,
    user: User,
    project_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    search: str | None = None,
) -> list[Expense]:
    return list(
        ExpenseRepository(session).list(
            project_id=project_id,
            project_owner=None if user.is_admin() else user.id,
            date_from=date_from,
            date_to=date_to,
            search=(search or "").strip() or None,
        )
    )


def preview_expense_budget(
    session: Session,
    *,
    user: User,
    project_id: int,
    amount: float,
    expense_id: int | None = None,
) -> BudgetCheck:
    """Budget check for a prospective expense without saving anything."""

    _validate(amount, None)
    project = get_project(session, user=user, project_id=project_id)
    existing = ExpenseRepository(session).total_for_project(project.id, exclude_id=expense_id)
    return check_budget(project.budget, existing, amount)


def create_expense(
    session: Session,
    *,
    user: User,
    project_id: int,
    amount: float,
    description: str | None = None,
    expense_date: date | None = None,
    task_id: int | None = None,
) -> ExpenseResult:
    _validate(amount, description)
    project = get_project(session, user=user, project_id=project_id)
    _ensure_task_in_project(session, task_id, project.id)

    repository = ExpenseRepository(session)
    check = check_budget(project.budget, repository.total_for_project(project.id), amount)
    expense = repository.create(
        Expense(
            id=None,
            project_id=project.id,
            task_id=task_id,
            amount=amount,
            description=description.strip() if description else None,
            expense_date=expense_date or today_in_app_timezone(),
            created_by=user.id,
        )
    )
    record_activity(
        session,
        user,
        "created",
        "expense",
        expense.id,
        {
            "description": expense.description,
            "amount": expense.amount,
            "project_id": project.id,
            "project_title": project.title,
        },
    )
    _notify_over_budget(session, project=project, check=check)
    return ExpenseResult(expense=expense, budget=check)


def update_expense(
    session: Session,
    *,
    user: User,
    expense_id: int,
    amount: float | None = None,
    description: str | None = _UNSET,
    expense_date: date | None = None,
    task_id: int | None = _UNSET,
) -> ExpenseResult:
    current = get_expense(session, user=user, expense_id=expense_id)
    _validate(amount, None if description is _UNSET else description)
    project = get_project(session, user=user, project_id=current.project_id)

    changes: dict[str, Any] = {}
    if amount is not None:
        changes["amount"] = amount
    if expense_date is not None:
        changes["expense_date"] = expense_date
    if description is not _UNSET:
        changes["description"] = description.strip() if description else None
    if task_id is not _UNSET:
        _ensure_task_in_project(session, task_id, project.id)
        changes["task_id"] = task_id

    repository = ExpenseRepository(session)
    new_amount = changes.get("amount", current.amount)
    check = check_budget(
        project.budget,
        repository.total_for_project(project.id, exclude_id=current.id),
        new_amount,
    )
    updated = repository.update(replace(current, **changes))

    details: dict[str, Any] = {"description": updated.description, "amount": updated.amount}
    if updated.amount != current.amount:
        details["previous_amount"] = current.amount
    record_activity(session, user, "updated", "expense", updated.id, details)
    if updated.amount > current.amount:
        _notify_over_budget(session, project=project, check=check)
    return ExpenseResult(expense=updated, budget=check)


def delete_expense(session: Session, *, user: User, expense_id: int) -> None:
    expense = get_expense(session, user=user, expense_id=expense_id)
    ExpenseRepository(session).delete(expense.id)
    record_activity(
        session,
        user,
        "deleted",
        "expense",
        expense.id,
        {"description": expense.description, "amount": expense.amount},
    )


__all__ = [
    "ExpenseResult",
    "create_expense",
    "delete_expense",
    "get_expense",
    "list_expenses",
    "preview_expense_budget",
    "update_expense",
]
