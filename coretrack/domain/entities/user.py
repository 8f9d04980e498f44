"""Domain entity representing a user and its public profile."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    role: Role
    full_name: str | None
    email: str
    password: str
    bio: str | None = None
    phone: str | None = None
    company: str | None = None
    website: str | None = None
    avatar_url: str | None = None
    two_factor_enabled: bool = False
    email_verified: bool = False
    token_version: int = 0
    is_active: bool = True
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role.is_admin

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


__all__ = ["User"]
