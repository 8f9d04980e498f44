"""Avatar upload and removal backed by blob storage."""

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.domain.entities import User
from coretrack.infrastructure import storage
from coretrack.infrastructure.repositories import UserRepository

from .update_profile import get_profile

logger = logging.getLogger(__name__)

MAX_AVATAR_BYTES = 5 * 1024 * 1024
ALLOWED_AVATAR_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)


def upload_avatar(
    session: Session,
    *,
    user: User,
    filename: str,
    content: bytes,
    content_type: str | None,
) -> User:
    """Store the image and point ``avatar_url`` at its public URL."""

    if content_type not in ALLOWED_AVATAR_TYPES:
        raise ValueError("Avatar must be a JPEG, PNG, GIF or WebP image")
    if not content:
        raise ValueError("Avatar file is empty")
    if len(content) > MAX_AVATAR_BYTES:
        raise ValueError("Avatar must be 5 MB or smaller")

    current = get_profile(session, user_id=user.id)
    url = storage.upload_blob(
        storage.avatar_blob_path(current.id, filename or "avatar"),
        content,
        content_type=content_type,
    )
    previous_path = storage.blob_path_from_url(current.avatar_url) if current.avatar_url else None
    updated = UserRepository(session).update(replace(current, avatar_url=url))
    new_path = storage.blob_path_from_url(url)
    if previous_path and previous_path != new_path:
        storage.delete_blob(previous_path)

    record_activity(session, updated, "avatar_updated", "profile", updated.id, {"avatar_url": url})
    return updated


def delete_avatar(session: Session, *, user: User) -> User:
    current = get_profile(session, user_id=user.id)
    if not current.avatar_url:
        return current
    blob_path = storage.blob_path_from_url(current.avatar_url)
    if blob_path:
        storage.delete_blob(blob_path)
    else:
        logger.info("Avatar of user %s is not stored in the avatar container", current.id)
    updated = UserRepository(session).update(replace(current, avatar_url=None))
    record_activity(session, updated, "avatar_updated", "profile", updated.id, {"avatar_url": None})
    return updated


__all__ = ["ALLOWED_AVATAR_TYPES", "MAX_AVATAR_BYTES", "delete_avatar", "upload_avatar"]
