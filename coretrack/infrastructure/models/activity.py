"""SQLAlchemy model for the append-only activity log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from coretrack.infrastructure.database import Base
from coretrack.utils import now_in_app_naive_datetime

from ._types import json_document


class ActivityModel(Base):
    """Database representation of one recorded user action."""

    __tablename__ = "activity"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    action = Column(String(50), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False, index=True)
    entity_id = Column(String(255), nullable=False)
    details = Column(json_document, nullable=False, default=dict)
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )

    actor = relationship("UserModel", lazy="joined")


__all__ = ["ActivityModel"]
