"""Azure Blob Storage helpers for user avatars."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional
from urllib.parse import unquote, urlparse

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from coretrack.config import get_settings

AVATAR_PREFIX = "avatars"


@lru_cache
def _get_blob_service_client() -> BlobServiceClient:
    settings = get_settings()
    if not settings.azure_storage_connection_string:
        msg = "Azure storage connection string is not configured"
        raise RuntimeError(msg)
    return BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )


@lru_cache
def _get_container_client() -> ContainerClient:
    settings = get_settings()
    if not settings.azure_storage_container_name:
        msg = "Azure storage container name is not configured"
        raise RuntimeError(msg)
    service_client = _get_blob_service_client()
    try:
        service_client.create_container(
            settings.azure_storage_container_name, public_access="blob"
        )
    except ResourceExistsError:
        pass
    return service_client.get_container_client(settings.azure_storage_container_name)


def avatar_blob_path(user_id: int, filename: str) -> str:
    """Return the blob path used for ``user_id``'s avatar named ``filename``."""

    extension = ""
    if "." in filename:
        extension = "." + filename.rsplit(".", 1)[1].lower()
    return f"{AVATAR_PREFIX}/{user_id}/avatar{extension}"


def upload_blob(
    blob_path: str,
    data: bytes,
    *,
    content_type: Optional[str] = None,
) -> str:
    """Upload ``data`` at ``blob_path`` and return the blob's public URL."""

    blob_client = _get_container_client().get_blob_client(blob_path)
    content_settings = None
    if content_type is not None:
        content_settings = ContentSettings(content_type=content_type)
    blob_client.upload_blob(
        data,
        overwrite=True,
        content_settings=content_settings,
    )
    return blob_client.url


def delete_blob(blob_path: str) -> None:
    """Delete the blob located at ``blob_path`` if it exists."""

    blob_client = _get_container_client().get_blob_client(blob_path)
    try:
        blob_client.delete_blob()
    except ResourceNotFoundError:
        return


def blob_path_from_url(url: str) -> str | None:
    """Recover the blob path from a URL returned by :func:`upload_blob`.

    Returns ``None`` when ``url`` does not point inside the avatar prefix.
    """

    settings = get_settings()
    path = unquote(urlparse(url).path).lstrip("/")
    container = settings.azure_storage_container_name
    if container and path.startswith(f"{container}/"):
        path = path[len(container) + 1 :]
    if not path.startswith(f"{AVATAR_PREFIX}/"):
        return None
    return path


__all__ = [
    "AVATAR_PREFIX",
    "avatar_blob_path",
    "blob_path_from_url",
    "delete_blob",
    "upload_blob",
]
