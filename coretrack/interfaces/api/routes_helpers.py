"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from coretrack.domain.exceptions import ConflictError, NotFoundError, PermissionDeniedError

_STATUS_BY_ERROR: tuple[tuple[type[ValueError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def http_error_from(exc: ValueError) -> HTTPException:
    """Translate a use case failure into the matching HTTP error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


__all__ = ["http_error_from"]
