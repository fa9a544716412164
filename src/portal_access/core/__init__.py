"""Cross-cutting concerns: errors and logging."""

from portal_access.core.errors import (
    AccessDeniedError,
    AppException,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from portal_access.core.logging import configure_logging


__all__ = [
    "AccessDeniedError",
    "AppException",
    "ConflictError",
    "NotFoundError",
    "ValidationError",
    "configure_logging",
]
