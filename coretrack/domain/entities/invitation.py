"""Domain entity for pending workspace invitations."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Invitation:
    """An email address invited to join before any user row exists for it."""

    id: int | None
    email: str
    full_name: str | None
    role_alias: str
    token: str
    invited_by: int | None
    created_at: datetime | None
    expires_at: datetime
    accepted_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.accepted_at is None


__all__ = ["Invitation"]
