"""Use cases for expenses."""

from .manage_expenses import (
    ExpenseResult,
    create_expense,
    delete_expense,
    get_expense,
    list_expenses,
    preview_expense_budget,
    update_expense,
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
