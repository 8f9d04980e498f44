"""Transactional email delivered through SendGrid.

Every helper returns ``True`` only when SendGrid accepted the message. Missing
credentials or API failures are logged and reported as ``False`` so callers
can carry on without email.
"""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from coretrack.config import get_settings

logger = logging.getLogger(__name__)


def _describe_error_body(body: Any) -> str | None:
    """Turn a SendGrid error payload into a single readable line."""

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, dict):
        messages = [
            f"{error['message']} (help: {error['help']})"
            if error.get("help")
            else str(error["message"])
            for error in body.get("errors") or []
            if isinstance(error, dict) and error.get("message")
        ]
        if messages:
            return "; ".join(messages)
        return json.dumps(body, default=str)
    if isinstance(body, list) and body:
        return "; ".join(str(item) for item in body)
    return None


def _log_failure(source: Any, *, raised: bool) -> None:
    status_code = getattr(source, "status_code", None)
    details = _describe_error_body(getattr(source, "body", None))
    if status_code is None and details is None:
        if raised:
            logger.exception("Error sending email via SendGrid: %s", source)
        else:
            logger.error("SendGrid returned an unexpected response")
        return
    logger.error(
        "SendGrid request failed with status %s: %s",
        status_code if status_code is not None else "unknown",
        details or "no details",
    )


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid is not configured; email to %s not sent", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )
    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:  # noqa: BLE001 - python-http-client raises many types
        _log_failure(exc, raised=True)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_failure(response, raised=False)
        return False
    return True


def _paragraphs(*lines: str) -> str:
    return "".join(f"<p>{line}</p>" for line in lines)


def _link(url: str, label: str) -> str:
    return f'<a href="{escape(url, quote=True)}">{escape(label)}</a>'


def send_invitation_email(
    email: str, token: str, *, invited_by: str | None = None
) -> bool:
    """Invite ``email`` to join the workspace with a one-time link."""

    settings = get_settings()
    url = f"{settings.site_url.rstrip('/')}/accept-invitation?token={token}"
    inviter = escape(invited_by) if invited_by else "A CoreTrack administrator"
    html_content = _paragraphs(
        "Hello,",
        f"{inviter} invited you to join their CoreTrack workspace.",
        _link(url, "Accept the invitation"),
        f"The link expires in {settings.invitation_expire_hours} hours.",
    )
    return send_email("You have been invited to CoreTrack", html_content, email)


def send_verification_email(email: str, token: str) -> bool:
    """Send the link that confirms ownership of ``email``."""

    settings = get_settings()
    url = f"{settings.site_url.rstrip('/')}/verify-email?token={token}"
    html_content = _paragraphs(
        "Welcome to CoreTrack.",
        "Please confirm your email address to finish setting up your account.",
        _link(url, "Verify email"),
    )
    return send_email("Verify your CoreTrack email", html_content, email)


def send_password_reset_email(email: str, token: str) -> bool:
    """Send a password reset link."""

    settings = get_settings()
    url = f"{settings.site_url.rstrip('/')}/reset-password?token={token}"
    html_content = _paragraphs(
        "Hello,",
        "We received a request to reset your CoreTrack password.",
        _link(url, "Choose a new password"),
        "If you did not request this, you can ignore this message.",
    )
    return send_email("Reset your CoreTrack password", html_content, email)


def send_notification_email(
    email: str,
    title: str,
    message: str,
    *,
    action_url: str | None = None,
    action_text: str | None = None,
) -> bool:
    """Mirror an in-app notification by email."""

    lines = [escape(message)]
    if action_url:
        settings = get_settings()
        url = action_url
        if url.startswith("/"):
            url = f"{settings.site_url.rstrip('/')}{url}"
        lines.append(_link(url, action_text or "Open CoreTrack"))
    return send_email(title, _paragraphs(*lines), email)
