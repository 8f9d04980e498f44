"""SQLAlchemy model for pending invitations."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from coretrack.infrastructure.database import Base
from coretrack.utils import now_in_app_naive_datetime


class InvitationModel(Base):
    __tablename__ = "invitation"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    full_name = Column(String(120), nullable=True)
    role_alias = Column(String(50), nullable=False)
    token = Column(String(128), nullable=False, unique=True, index=True)
    invited_by = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    expires_at = Column(DateTime, nullable=False)
    accepted_at = Column(DateTime, nullable=True)


__all__ = ["InvitationModel"]
