"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from coretrack.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)

DEFAULT_ROLES: tuple[tuple[str, str], ...] = (
    ("Administrator", "admin"),
    ("User", "user"),
)


def _build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``."""

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    created = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)

    if created.dialect.name == "sqlite":

        @event.listens_for(created, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return created


engine = _build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_roles(session: Session) -> None:
    """Insert the default roles when they are missing."""

    from coretrack.infrastructure.models import RoleModel

    existing = {alias for (alias,) in session.query(RoleModel.alias).all()}
    missing = [(name, alias) for name, alias in DEFAULT_ROLES if alias not in existing]
    if not missing:
        return
    for name, alias in missing:
        session.add(RoleModel(name=name, alias=alias))
    session.commit()
    logger.info("Seeded roles: %s", ", ".join(alias for _, alias in missing))


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from coretrack.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    with SessionLocal() as session:
        seed_roles(session)


def get_db() -> Generator:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
