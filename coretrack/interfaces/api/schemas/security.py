"""Schemas for account security endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=128)


class TwoFactorUpdate(BaseModel):
    enabled: bool


class SecurityStatusRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    two_factor_enabled: bool
    email_verified: bool
    last_login: datetime | None


__all__ = ["PasswordChange", "SecurityStatusRead", "TwoFactorUpdate"]
