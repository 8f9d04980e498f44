"""Use cases for inviting people to the workspace."""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.application.use_cases.auth import create_account, normalize_email
from coretrack.config import get_settings
from coretrack.domain.entities import ROLE_ALIASES, ROLE_USER, Invitation, User
from coretrack.domain.exceptions import ConflictError, NotFoundError
from coretrack.infrastructure.email import send_invitation_email
from coretrack.infrastructure.repositories import InvitationRepository, UserRepository
from coretrack.infrastructure.security import generate_token
from coretrack.utils import now_in_app_timezone

from .permissions import ensure_admin

logger = logging.getLogger(__name__)


def invite_user(
    session: Session,
    *,
    actor: User,
    email: str,
    full_name: str | None = None,
    role_alias: str = ROLE_USER,
) -> tuple[Invitation, bool]:
    """Create an invitation and email its link.

    No user row is created until the invitation is accepted. Returns the
    invitation and whether the email was delivered.
    """

    ensure_admin(actor)
    normalized_email = normalize_email(email)
    role = role_alias.strip().lower()
    if role not in ROLE_ALIASES:
        raise ValueError(f"Role '{role_alias}' is not allowed")
    if UserRepository(session).get_by_email(normalized_email):
        raise ConflictError("A user with this email already exists")

    settings = get_settings()
    now = now_in_app_timezone()
    invitation = InvitationRepository(session).create(
        Invitation(
            id=None,
            email=normalized_email,
            full_name=(full_name or "").strip() or None,
            role_alias=role,
            token=generate_token(),
            invited_by=actor.id,
            created_at=now,
            expires_at=now + timedelta(hours=settings.invitation_expire_hours),
        )
    )

    emailed = send_invitation_email(
        invitation.email, invitation.token, invited_by=actor.display_name
    )
    if not emailed:
        logger.warning("Invitation email for %s could not be sent", invitation.email)

    record_activity(
        session,
        actor,
        "invited",
        "user",
        invitation.email,
        {
            "email": invitation.email,
            "full_name": invitation.full_name,
            "role": invitation.role_alias,
            "invitation_method": "email",
        },
    )
    return invitation, emailed


def list_pending_invitations(session: Session, *, actor: User) -> list[Invitation]:
    ensure_admin(actor)
    return InvitationRepository(session).list_pending()


def accept_invitation(
    session: Session, *, token: str, password: str, full_name: str | None = None
) -> User:
    """Turn a pending invitation into an account with the invited role."""

    repository = InvitationRepository(session)
    invitation = repository.get_by_token(token)
    if invitation is None or not invitation.is_pending:
        raise NotFoundError("Invitation not found or already used")
    now = now_in_app_timezone()
    if invitation.expires_at is not None and invitation.expires_at < now:
        raise ValueError("This invitation has expired")

    user = create_account(
        session,
        email=invitation.email,
        password=password,
        full_name=full_name or invitation.full_name,
        role_alias=invitation.role_alias,
        email_verified=True,
    )
    repository.mark_accepted(invitation.id, now)
    record_activity(
        session,
        user,
        "joined",
        "user",
        user.id,
        {"email": user.email, "invited_by": invitation.invited_by},
    )
    return user


__all__ = ["accept_invitation", "invite_user", "list_pending_invitations"]
