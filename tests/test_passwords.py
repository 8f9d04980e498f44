"""Unit tests for password strength scoring."""

import pytest

from coretrack.application.use_cases.auth import (
    STRENGTH_LABELS,
    ensure_strong_password,
    evaluate_password_strength,
)


@pytest.mark.parametrize(
    ("password", "score"),
    [
        ("", 0),
        ("abc", 1),
        ("abcdefgh", 2),
        ("Abcdefgh", 3),
        ("Abcdefg!", 4),
    ],
)
def test_score_counts_requirements(password, score):
    strength = evaluate_password_strength(password)

    assert strength.score == score
    assert strength.label == STRENGTH_LABELS[score]


def test_labels_cover_every_score():
    assert STRENGTH_LABELS == ("Very Weak", "Weak", "Fair", "Good", "Strong")


def test_weak_password_lists_missing_rules():
    with pytest.raises(ValueError) as excinfo:
        ensure_strong_password("lowercase")

    message = str(excinfo.value)
    assert "one uppercase letter" in message
    assert "one special character" in message


def test_strong_password_is_returned():
    assert ensure_strong_password("Str0ng!Pass") == "Str0ng!Pass"
