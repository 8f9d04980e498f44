"""User, profile and invitation schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

RoleAlias = Literal["admin", "user"]


class RoleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    alias: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str | None
    email: EmailStr
    bio: str | None = None
    phone: str | None = None
    company: str | None = None
    website: str | None = None
    avatar_url: str | None = None
    two_factor_enabled: bool
    email_verified: bool
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    role: RoleRead


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, max_length=120)
    role: RoleAlias | None = None
    is_active: bool | None = None


class UserRoleUpdate(BaseModel):
    role: RoleAlias


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, max_length=120)
    bio: str | None = Field(default=None, max_length=1000)
    phone: str | None = Field(default=None, max_length=32)
    company: str | None = Field(default=None, max_length=120)
    website: str | None = Field(default=None, max_length=255)


class InvitationCreate(BaseModel):
    email: EmailStr
    full_name: str | None = Field(default=None, max_length=120)
    role: RoleAlias = "user"


class InvitationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    full_name: str | None
    role_alias: str
    invited_by: int | None
    created_at: datetime | None
    expires_at: datetime
    accepted_at: datetime | None = None


class InvitationCreateResponse(BaseModel):
    invitation: InvitationRead
    email_sent: bool


class InvitationAccept(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, max_length=128)
    full_name: str | None = Field(default=None, max_length=120)


__all__ = [
    "InvitationAccept",
    "InvitationCreate",
    "InvitationCreateResponse",
    "InvitationRead",
    "ProfileUpdate",
    "RoleRead",
    "UserRead",
    "UserRoleUpdate",
    "UserUpdate",
]
