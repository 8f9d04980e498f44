"""SQLAlchemy model for the user (profile) table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from coretrack.infrastructure.database import Base
from coretrack.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of an account and its public profile."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False, index=True)
    full_name = Column(String(120), nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)
    phone = Column(String(32), nullable=True)
    company = Column(String(120), nullable=True)
    website = Column(String(255), nullable=True)
    avatar_url = Column(String(512), nullable=True)
    two_factor_enabled = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    email_verified = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    token_version = Column(Integer, nullable=False, default=0, server_default="0")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    role = relationship("RoleModel", lazy="joined")


__all__ = ["UserModel"]
