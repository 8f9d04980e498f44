"""Use cases for authentication and account lifecycle."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .email_verification import resend_verification_email, send_verification, verify_email
from .password_reset import request_password_reset, reset_password
from .passwords import (
    PasswordStrength,
    SPECIAL_CHARACTERS,
    STRENGTH_LABELS,
    ensure_strong_password,
    evaluate_password_strength,
)
from .sign_up import create_account, normalize_email, sign_up
from .tokens import (
    issue_access_token,
    issue_purpose_token,
    password_signature_for,
    resolve_token_user,
)

__all__ = [
    "AuthenticationStatus",
    "PasswordStrength",
    "SPECIAL_CHARACTERS",
    "STRENGTH_LABELS",
    "authenticate_user",
    "create_account",
    "ensure_strong_password",
    "evaluate_password_strength",
    "issue_access_token",
    "issue_purpose_token",
    "normalize_email",
    "password_signature_for",
    "request_password_reset",
    "resend_verification_email",
    "reset_password",
    "resolve_token_user",
    "send_verification",
    "sign_up",
    "verify_email",
]
