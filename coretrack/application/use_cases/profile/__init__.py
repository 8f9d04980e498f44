"""Use cases for the signed-in user's own profile."""

from .avatar import ALLOWED_AVATAR_TYPES, MAX_AVATAR_BYTES, delete_avatar, upload_avatar
from .update_profile import get_profile, normalize_phone, normalize_website, update_profile

__all__ = [
    "ALLOWED_AVATAR_TYPES",
    "MAX_AVATAR_BYTES",
    "delete_avatar",
    "get_profile",
    "normalize_phone",
    "normalize_website",
    "update_profile",
    "upload_avatar",
]
