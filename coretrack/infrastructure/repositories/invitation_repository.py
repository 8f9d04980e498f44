"""Persistence helpers for invitations."""

from __future__ import annotations

from sqlalchemy.orm import Session

from coretrack.domain.entities import Invitation
from coretrack.infrastructure.models import InvitationModel
from coretrack.utils import ensure_app_naive_datetime, ensure_app_timezone


class InvitationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, invitation: Invitation) -> Invitation:
        model = InvitationModel(
            email=invitation.email,
            full_name=invitation.full_name,
            role_alias=invitation.role_alias,
            token=invitation.token,
            invited_by=invitation.invited_by,
            expires_at=ensure_app_naive_datetime(invitation.expires_at),
        )
        if invitation.created_at is not None:
            model.created_at = ensure_app_naive_datetime(invitation.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_by_token(self, token: str) -> Invitation | None:
        model = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.token == token)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_pending(self) -> list[Invitation]:
        models = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.accepted_at.is_(None))
            .order_by(InvitationModel.created_at.desc(), InvitationModel.id.desc())
            .all()
        )
        return [self._to_entity(model) for model in models]

    def mark_accepted(self, invitation_id: int, accepted_at) -> None:
        model = self.session.get(InvitationModel, invitation_id)
        if model is None:
            raise ValueError(f"Invitation with id {invitation_id} not found")
        model.accepted_at = ensure_app_naive_datetime(accepted_at)
        self.session.add(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: InvitationModel) -> Invitation:
        return Invitation(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            role_alias=model.role_alias,
            token=model.token,
            invited_by=model.invited_by,
            created_at=ensure_app_timezone(model.created_at),
            expires_at=ensure_app_timezone(model.expires_at),
            accepted_at=ensure_app_timezone(model.accepted_at),
        )


__all__ = ["InvitationRepository"]
