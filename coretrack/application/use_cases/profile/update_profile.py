"""Use cases for reading and editing the current profile."""

from dataclasses import replace

from sqlalchemy.orm import Session

from coretrack.application.use_cases.activity import record_activity
from coretrack.domain.entities import User
from coretrack.domain.exceptions import NotFoundError
from coretrack.infrastructure.repositories import UserRepository

MIN_PHONE_DIGITS = 10
_EDITABLE_FIELDS = ("full_name", "bio", "phone", "company", "website")


def normalize_website(value: str | None) -> str | None:
    """Prefix scheme-less URLs with ``https://``."""

    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    if not cleaned.lower().startswith(("http://", "https://")):
        cleaned = f"https://{cleaned}"
    return cleaned


def normalize_phone(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    digits = sum(char.isdigit() for char in cleaned)
    if digits < MIN_PHONE_DIGITS:
        raise ValueError(f"Phone number must contain at least {MIN_PHONE_DIGITS} digits")
    return cleaned


def get_profile(session: Session, *, user_id: int) -> User:
    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("Profile not found")
    return user


def update_profile(session: Session, *, user: User, **changes: str | None) -> User:
    """Apply the provided profile fields; fields left out are kept."""

    unknown = set(changes) - set(_EDITABLE_FIELDS)
    if unknown:
        raise ValueError("Unknown profile field(s): " + ", ".join(sorted(unknown)))

    cleaned: dict[str, str | None] = {}
    for name, value in changes.items():
        if name == "website":
            cleaned[name] = normalize_website(value)
        elif name == "phone":
            cleaned[name] = normalize_phone(value)
        else:
            cleaned[name] = (value or "").strip() or None

    current = get_profile(session, user_id=user.id)
    changed_fields = [
        name for name in _EDITABLE_FIELDS
        if name in cleaned and cleaned[name] != getattr(current, name)
    ]
    if not changed_fields:
        return current

    updated = UserRepository(session).update(
        replace(current, **{name: cleaned[name] for name in changed_fields})
    )
    record_activity(
        session,
        updated,
        "updated",
        "profile",
        updated.id,
        {"changed_fields": changed_fields},
    )
    return updated


__all__ = ["get_profile", "normalize_phone", "normalize_website", "update_profile"]
