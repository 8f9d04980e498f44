"""Schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    full_name: str | None = Field(default=None, max_length=120)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=128)


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)


class ResendVerificationRequest(BaseModel):
    email: EmailStr


class PasswordStrengthRequest(BaseModel):
    password: str = Field(..., max_length=128)


class PasswordStrengthRead(BaseModel):
    score: int
    label: str
    requirements: dict[str, bool]


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "ForgotPasswordRequest",
    "MessageResponse",
    "PasswordStrengthRead",
    "PasswordStrengthRequest",
    "ResendVerificationRequest",
    "ResetPasswordRequest",
    "SignUpRequest",
    "Token",
    "VerifyEmailRequest",
]
