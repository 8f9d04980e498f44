"""Business errors raised by the application use cases.

All of them derive from :class:`ValueError` so callers that only care about
"the operation was rejected" can keep catching ``ValueError``.
"""


class NotFoundError(ValueError):
    """The requested entity does not exist or is not visible to the caller."""


class PermissionDeniedError(ValueError):
    """The caller is not allowed to perform the operation."""


class ConflictError(ValueError):
    """The operation clashes with existing data (duplicate email, used token)."""


__all__ = ["NotFoundError", "PermissionDeniedError", "ConflictError"]
