"""Shared fixtures: a throwaway SQLite database and captured email."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "coretrack_api_tests.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from coretrack.config import get_settings  # noqa: E402

get_settings.cache_clear()

from fastapi.testclient import TestClient  # noqa: E402

from coretrack.application.use_cases.auth import create_account, issue_access_token  # noqa: E402
from coretrack.domain.entities import ROLE_ADMIN, ROLE_USER, User  # noqa: E402
from coretrack.infrastructure import email as email_module  # noqa: E402
from coretrack.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from coretrack.main import create_app  # noqa: E402

DEFAULT_PASSWORD = "Str0ng!Pass"


@dataclass
class SentEmail:
    subject: str
    html_content: str
    recipient: str


@pytest.fixture(autouse=True)
def reset_database():
    """Every test starts from empty tables with the default roles."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def outbox(monkeypatch: pytest.MonkeyPatch) -> list[SentEmail]:
    """Capture outgoing email instead of calling SendGrid."""

    sent: list[SentEmail] = []

    def fake_send_email(subject: str, html_content: str, recipient: str) -> bool:
        sent.append(SentEmail(subject, html_content, recipient))
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send_email)
    return sent


@pytest.fixture()
def db_session():
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session):
    """Create a verified account and return it."""

    def _make_user(
        email: str = "user@example.com",
        *,
        full_name: str | None = "Regular User",
        role: str = ROLE_USER,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        return create_account(
            db_session,
            email=email,
            password=password,
            full_name=full_name,
            role_alias=role,
            email_verified=True,
        )

    return _make_user


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin@example.com", full_name="Ada Admin", role=ROLE_ADMIN)


@pytest.fixture()
def member(make_user) -> User:
    return make_user("member@example.com", full_name="Max Member")


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_access_token(user)}"}


@pytest.fixture()
def headers_for():
    return auth_headers


@pytest.fixture()
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture()
def member_headers(member) -> dict[str, str]:
    return auth_headers(member)
