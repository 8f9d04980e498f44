"""Unit tests for budget warnings and goal clamping."""

from __future__ import annotations

import pytest

from coretrack.application.use_cases.budget import (
    check_budget,
    clamp_percentage,
    usage_percentage,
)
from coretrack.application.use_cases.goals import clamp_progress


def test_over_budget_warning_reports_the_overrun():
    check = check_budget(1000, 600, 500)

    assert check.total == 1100
    assert check.over_budget is True
    assert check.warning == (
        "This expense will put the project over budget by $100. "
        "Total will be $1,100 of $1,000 budget."
    )


def test_high_usage_warning_uses_one_decimal():
    check = check_budget(1000, 700, 150)

    assert check.over_budget is False
    assert check.warning == "This expense will use 85.0% of the project budget ($850 of $1,000)."


@pytest.mark.parametrize(("budget", "existing"), [(1000, 100), (None, 5000), (0, 10)])
def test_no_warning_below_threshold_or_without_budget(budget, existing):
    assert check_budget(budget, existing, 50).warning is None


def test_percentage_is_not_clamped_but_display_is():
    check = check_budget(100, 200, 50)

    assert check.percentage == pytest.approx(250.0)
    assert check.display_percentage == 100.0


def test_usage_helpers():
    assert usage_percentage(50, 200) == pytest.approx(25.0)
    assert usage_percentage(50, None) is None
    assert clamp_percentage(None) == 0.0
    assert clamp_percentage(-5) == 0.0


@pytest.mark.parametrize(
    ("value", "expected"), [(-3, 0.0), (4, 4.0), (10, 10.0), (12.5, 10.0)]
)
def test_goal_progress_is_clamped_to_target(value, expected):
    assert clamp_progress(value, 10) == expected
