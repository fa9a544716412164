"""Exceptions raised by the access control core.

Configuration and input errors are raised as exceptions and propagate to the
caller. Access denials are not errors: the decision engine returns them as
values, and only ``AccessDeniedError`` turns one into an exception for
handlers that want to abort.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all package errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code a host application should answer with
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=str(role_id))
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when there's a conflict with existing data."""

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Raised when input data fails validation.

    Example:
        raise ValidationError(
            "Invalid visibility",
            errors=[{"field": "visible_departments", "message": "Mixed sentinel"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class ForbiddenError(AppException):
    """Raised when a caller lacks permission for an administrative operation."""

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class UnknownPermissionError(ValidationError):
    """Raised when a permission key is not declared in the catalog.

    This is a configuration error, not an access denial.
    """

    message = "Unknown permission"
    error_code = "unknown_permission"

    def __init__(self, keys: list[str] | tuple[str, ...], **kwargs: Any) -> None:
        self.keys = tuple(keys)
        details = kwargs.pop("details", {})
        details["permissions"] = list(self.keys)
        message = kwargs.pop("message", None) or (
            f"Unknown permission(s): {', '.join(self.keys)}"
        )
        super().__init__(message=message, details=details, **kwargs)


class RoleNotFoundError(NotFoundError):
    """Raised when a role id does not exist in the role store."""

    error_code = "role_not_found"

    def __init__(self, role_id: object, **kwargs: Any) -> None:
        super().__init__(
            "Role not found",
            resource="role",
            resource_id=str(role_id),
            **kwargs,
        )


class DuplicateRoleNameError(ConflictError):
    """Raised when a role name is already taken (exact, case-sensitive)."""

    error_code = "duplicate_role_name"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            f"A role named '{name}' already exists",
            details={"name": name},
            **kwargs,
        )


class AccessDeniedError(AppException):
    """Raised when a handler aborts on a denied access decision.

    Every denial reason, and a node that does not exist at all, must look the
    same to the requester, so this presents as a plain missing resource.
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404
