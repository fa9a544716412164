"""Error types for the access control core."""

from portal_access.core.errors.exceptions import (
    AccessDeniedError,
    AppException,
    ConflictError,
    DuplicateRoleNameError,
    ForbiddenError,
    NotFoundError,
    RoleNotFoundError,
    UnknownPermissionError,
    ValidationError,
)


__all__ = [
    "AccessDeniedError",
    "AppException",
    "ConflictError",
    "DuplicateRoleNameError",
    "ForbiddenError",
    "NotFoundError",
    "RoleNotFoundError",
    "UnknownPermissionError",
    "ValidationError",
]
