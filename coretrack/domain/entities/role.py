"""Domain entity representing a user role."""

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLE_ALIASES: frozenset[str] = frozenset({ROLE_ADMIN, ROLE_USER})


@dataclass
class Role:
    """A role that can be assigned to a user (``admin`` or ``user``)."""

    id: int
    name: str
    alias: str

    @property
    def is_admin(self) -> bool:
        return self.alias.lower() == ROLE_ADMIN


__all__ = ["Role", "ROLE_ADMIN", "ROLE_USER", "ROLE_ALIASES"]
