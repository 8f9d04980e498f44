"""Budget usage math shared by expenses, project detail and the dashboard."""

from __future__ import annotations

from dataclasses import dataclass

from coretrack.utils import format_currency

WARNING_THRESHOLD = 80.0


@dataclass(frozen=True)
class BudgetCheck:
    """Result of adding ``amount`` to a project's existing spend.

    ``percentage`` is the raw usage and may exceed 100; only
    ``display_percentage`` is clamped for progress bars.
    """

    budget: float | None
    total: float
    percentage: float | None
    warning: str | None

    @property
    def over_budget(self) -> bool:
        return self.percentage is not None and self.percentage > 100

    @property
    def display_percentage(self) -> float:
        return clamp_percentage(self.percentage)


def usage_percentage(spent: float, budget: float | None) -> float | None:
    if not budget or budget <= 0:
        return None
    return spent / budget * 100


def clamp_percentage(value: float | None) -> float:
    if value is None:
        return 0.0
    return max(0.0, min(value, 100.0))


def check_budget(budget: float | None, existing_total: float, amount: float) -> BudgetCheck:
    """Return the projected total and a warning above 80% or 100% usage."""

    total = existing_total + amount
    percentage = usage_percentage(total, budget)
    warning = None
    if percentage is not None and percentage > 100:
        warning = (
            "This expense will put the project over budget by "
            f"{format_currency(total - budget)}. Total will be "
            f"{format_currency(total)} of {format_currency(budget)} budget."
        )
    elif percentage is not None and percentage > WARNING_THRESHOLD:
        warning = (
            f"This expense will use {percentage:.1f}% of the project budget "
            f"({format_currency(total)} of {format_currency(budget)})."
        )
    return BudgetCheck(budget=budget, total=total, percentage=percentage, warning=warning)


__all__ = [
    "BudgetCheck",
    "WARNING_THRESHOLD",
    "check_budget",
    "clamp_percentage",
    "usage_percentage",
]
