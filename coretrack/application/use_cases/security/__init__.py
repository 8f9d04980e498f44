"""Use cases for account security settings."""

from .account_security import (
    SecurityStatus,
    change_password,
    get_security_status,
    set_two_factor,
    sign_out_all_sessions,
)

__all__ = [
    "SecurityStatus",
    "change_password",
    "get_security_status",
    "set_two_factor",
    "sign_out_all_sessions",
]
