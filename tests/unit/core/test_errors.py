"""Unit tests for the exception hierarchy."""

from uuid import uuid4

import pytest

from portal_access.core.errors import (
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


pytestmark = pytest.mark.unit


class TestAppException:
    """Tests for the base exception."""

    def test_defaults(self):
        exc = AppException()

        assert exc.message == "An unexpected error occurred"
        assert exc.error_code == "internal_error"
        assert exc.status_code == 500
        assert exc.details == {}
        assert str(exc) == exc.message

    def test_overrides(self):
        exc = AppException("Boom", error_code="boom", details={"a": 1})

        assert (exc.message, exc.error_code, exc.details) == ("Boom", "boom", {"a": 1})


class TestSubclasses:
    """Tests for the concrete error types."""

    def test_not_found_details(self):
        exc = NotFoundError("Node not found", resource="node", resource_id="n1")

        assert exc.status_code == 404
        assert exc.details == {"resource": "node", "resource_id": "n1"}

    def test_validation_errors_list(self):
        exc = ValidationError("Bad", errors=[{"field": "name", "message": "blank"}])

        assert exc.status_code == 422
        assert exc.details["errors"][0]["field"] == "name"

    def test_unknown_permission(self):
        exc = UnknownPermissionError(["files:fly", "chat:shout"])

        assert isinstance(exc, ValidationError)
        assert exc.keys == ("files:fly", "chat:shout")
        assert exc.details["permissions"] == ["files:fly", "chat:shout"]
        assert exc.error_code == "unknown_permission"
        assert "files:fly" in exc.message

    def test_role_not_found(self):
        role_id = uuid4()
        exc = RoleNotFoundError(role_id)

        assert isinstance(exc, NotFoundError)
        assert exc.error_code == "role_not_found"
        assert exc.details == {"resource": "role", "resource_id": str(role_id)}

    def test_duplicate_role_name(self):
        exc = DuplicateRoleNameError("Editor")

        assert isinstance(exc, ConflictError)
        assert exc.status_code == 409
        assert exc.details == {"name": "Editor"}

    def test_forbidden(self):
        assert ForbiddenError().status_code == 403

    def test_access_denied_is_indistinguishable_from_not_found(self):
        denied = AccessDeniedError()
        missing = NotFoundError()

        assert (denied.message, denied.error_code, denied.status_code) == (
            missing.message,
            missing.error_code,
            missing.status_code,
        )
