"""Domain entity representing a measurable goal."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Goal:
    id: int | None
    project_id: int | None
    title: str
    description: str | None
    target_value: float
    current_value: float
    created_by: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def progress_percentage(self) -> int:
        """Rounded progress relative to the target, not clamped."""

        if not self.target_value:
            return 0
        return round(self.current_value / self.target_value * 100)

    @property
    def is_reached(self) -> bool:
        return self.current_value >= self.target_value


__all__ = ["Goal"]
