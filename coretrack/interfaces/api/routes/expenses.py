"""CRUD endpoints for expenses, with budget warnings."""

from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from coretrack.application.use_cases.expenses import (
    create_expense as create_expense_uc,
    delete_expense as delete_expense_uc,
    get_expense,
    list_expenses as list_expenses_uc,
    preview_expense_budget,
    update_expense as update_expense_uc,
)
from coretrack.domain.entities import User
from coretrack.infrastructure.database import get_db
from coretrack.interfaces.api.dependencies import get_current_active_user
from coretrack.interfaces.api.routes_helpers import http_error_from
from coretrack.interfaces.api.schemas import (
    BudgetCheckRead,
    BudgetPreviewRequest,
    ExpenseCreate,
    ExpenseRead,
    ExpenseUpdate,
    ExpenseWithBudgetRead,
)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("/", response_model=list[ExpenseRead])
def list_expenses(
    project_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    expenses = list_expenses_uc(
        db,
        user=current_user,
        project_id=project_id,
        date_from=date_from,
        date_to=date_to,
        search=search,
    )
    return [ExpenseRead.model_validate(expense) for expense in expenses]


@router.post("/budget-check", response_model=BudgetCheckRead)
def check_expense_budget(
    payload: BudgetPreviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Preview the budget warning for an expense before saving it."""

    try:
        check = preview_expense_budget(
            db,
            user=current_user,
            project_id=payload.project_id,
            amount=payload.amount,
            expense_id=payload.expense_id,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return BudgetCheckRead.model_validate(check)


@router.post(
    "/", response_model=ExpenseWithBudgetRead, status_code=status.HTTP_201_CREATED
)
def create_expense(
    payload: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        result = create_expense_uc(db, user=current_user, **payload.model_dump())
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ExpenseWithBudgetRead.model_validate(result)


@router.get("/{expense_id}", response_model=ExpenseRead)
def read_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        expense = get_expense(db, user=current_user, expense_id=expense_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ExpenseRead.model_validate(expense)


@router.patch("/{expense_id}", response_model=ExpenseWithBudgetRead)
def update_expense(
    expense_id: int,
    payload: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        result = update_expense_uc(
            db,
            user=current_user,
            expense_id=expense_id,
            **payload.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ExpenseWithBudgetRead.model_validate(result)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        delete_expense_uc(db, user=current_user, expense_id=expense_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
