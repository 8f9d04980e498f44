"""Unit tests for the SendGrid email helpers."""

from __future__ import annotations

import json
import types

import pytest

from coretrack.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"
    site_url = "https://app.example.com/"
    invitation_expire_hours = 72


class StubClient:
    response = types.SimpleNamespace(status_code=202, body=None)
    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        StubClient.sent.append(message)
        return self.response


@pytest.fixture()
def configured(monkeypatch: pytest.MonkeyPatch):
    StubClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", StubClient)


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper exits early."""

    class Unconfigured:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: Unconfigured())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_email_success(configured) -> None:
    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(StubClient.sent) == 1


def test_unsuccessful_status_is_reported(configured, monkeypatch, caplog) -> None:
    body = json.dumps({"errors": [{"message": "Bad recipient"}]}).encode()
    monkeypatch.setattr(
        StubClient, "response", types.SimpleNamespace(status_code=400, body=body)
    )

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 400" in caplog.text
    assert "Bad recipient" in caplog.text


def test_send_email_logs_forbidden_error(configured, monkeypatch, caplog) -> None:
    """Forbidden responses from SendGrid surface meaningful log details."""

    class ForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {
                "errors": [
                    {
                        "message": "The provided authorization grant is invalid.",
                        "help": "https://sendgrid.com/docs/for-developers/sending-email/authentication/",
                    }
                ]
            }
        ).encode()

    def failing_send(self, message):
        raise ForbiddenError()

    monkeypatch.setattr(StubClient, "send", failing_send)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_invitation_email_links_to_the_site(outbox, monkeypatch) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())

    assert email_module.send_invitation_email(
        "new@example.com", "tok123", invited_by="Ada <Admin>"
    )

    [mail] = outbox
    assert mail.recipient == "new@example.com"
    assert "https://app.example.com/accept-invitation?token=tok123" in mail.html_content
    assert "Ada &lt;Admin&gt;" in mail.html_content
    assert "72 hours" in mail.html_content


def test_notification_email_expands_relative_links(outbox, monkeypatch) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())

    email_module.send_notification_email(
        "user@example.com", "Budget warning", "Over <budget>", action_url="/projects/3"
    )

    [mail] = outbox
    assert mail.subject == "Budget warning"
    assert "Over &lt;budget&gt;" in mail.html_content
    assert 'href="https://app.example.com/projects/3"' in mail.html_content
    assert "Open CoreTrack" in mail.html_content
