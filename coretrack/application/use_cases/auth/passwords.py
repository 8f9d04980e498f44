"""Password strength rules shared by sign up, reset and password change."""

from __future__ import annotations

from dataclasses import dataclass, field

MIN_PASSWORD_LENGTH = 8
SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
REQUIRED_SCORE = 4

STRENGTH_LABELS: tuple[str, ...] = ("Very Weak", "Weak", "Fair", "Good", "Strong")

_REQUIREMENT_MESSAGES: dict[str, str] = {
    "length": f"at least {MIN_PASSWORD_LENGTH} characters",
    "uppercase": "one uppercase letter",
    "lowercase": "one lowercase letter",
    "special": "one special character",
}


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    label: str
    requirements: dict[str, bool] = field(default_factory=dict)

    @property
    def missing(self) -> list[str]:
        return [name for name, met in self.requirements.items() if not met]


def evaluate_password_strength(password: str) -> PasswordStrength:
    """Score ``password`` from 0 to 4, one point per requirement met."""

    requirements = {
        "length": len(password) >= MIN_PASSWORD_LENGTH,
        "uppercase": any(char.isupper() for char in password),
        "lowercase": any(char.islower() for char in password),
        "special": any(char in SPECIAL_CHARACTERS for char in password),
    }
    score = sum(requirements.values())
    return PasswordStrength(
        score=score, label=STRENGTH_LABELS[score], requirements=requirements
    )


def ensure_strong_password(password: str) -> str:
    """Return ``password`` or raise ``ValueError`` listing the unmet rules."""

    strength = evaluate_password_strength(password)
    if strength.score < REQUIRED_SCORE:
        missing = ", ".join(_REQUIREMENT_MESSAGES[name] for name in strength.missing)
        raise ValueError(f"Password is too weak ({strength.label}): add {missing}")
    return password


__all__ = [
    "MIN_PASSWORD_LENGTH",
    "PasswordStrength",
    "REQUIRED_SCORE",
    "SPECIAL_CHARACTERS",
    "STRENGTH_LABELS",
    "ensure_strong_password",
    "evaluate_password_strength",
]
