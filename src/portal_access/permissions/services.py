"""Role management service.

Validates administrative role changes against the permission catalog before
anything reaches the repository, so a rejected request never leaves a
partially written role behind.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import pydantic
import structlog

from portal_access.core.errors import (
    DuplicateRoleNameError,
    RoleNotFoundError,
    ValidationError,
)
from portal_access.permissions.catalog import CATALOG, PermissionCatalog
from portal_access.permissions.models import Role
from portal_access.permissions.repos import RoleRepo


logger = structlog.get_logger()


def _build_role(**fields: Any) -> Role:
    """Construct a Role, converting pydantic errors to package errors."""
    try:
        return Role(**fields)
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid role data",
            errors=[
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ],
        ) from e


class RoleService:
    """Service for role CRUD operations.

    Callers are expected to have checked ``roles:manage`` for the acting
    administrator before calling into this service.
    """

    def __init__(self, repo: RoleRepo, catalog: PermissionCatalog = CATALOG) -> None:
        self.repo = repo
        self.catalog = catalog

    def create_role(
        self,
        name: str,
        description: str = "",
        permissions: Iterable[str] = (),
    ) -> Role:
        """Create a new role.

        Names are compared exactly and case-sensitively after surrounding
        whitespace is stripped, so " Editor" clashes with "Editor".

        Args:
            name: Unique role name
            description: Human-readable description
            permissions: Permission keys granted by the role

        Returns:
            The created role

        Raises:
            UnknownPermissionError: If any key is not in the catalog
            DuplicateRoleNameError: If the name is already taken
            ValidationError: If the name or description is invalid
        """
        keys = self.catalog.validate(permissions)
        role = _build_role(name=name, description=description, permissions=keys)

        if self.repo.get_by_name(role.name) is not None:
            raise DuplicateRoleNameError(role.name)

        self.repo.add(role)
        logger.info(
            "role_created",
            role_id=str(role.id),
            role_name=role.name,
            permission_count=len(role.permissions),
        )
        return role

    def get_role(self, role_id: UUID) -> Role:
        """Get a role by ID.

        Raises:
            RoleNotFoundError: If the role does not exist
        """
        role = self.repo.get(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)
        return role

    def get_role_by_name(self, name: str) -> Role | None:
        """Get a role by exact name, or None."""
        return self.repo.get_by_name(name)

    def list_roles(self) -> list[Role]:
        """List all roles sorted by name."""
        return sorted(self.repo.list(), key=lambda r: r.name)

    def update_role(
        self,
        role_id: UUID,
        *,
        name: str | None = None,
        description: str | None = None,
        permissions: Iterable[str] | None = None,
    ) -> Role:
        """Partially update a role.

        ``permissions`` replaces the whole set when given; it is never merged.
        To add a single permission, read the role and write back the full set.

        Args:
            role_id: The role to update
            name: New name, stripped and checked for clashes with other roles
            description: New description
            permissions: New complete permission set

        Returns:
            The updated role

        Raises:
            RoleNotFoundError: If the role does not exist
            UnknownPermissionError: If any key is not in the catalog
            DuplicateRoleNameError: If another role already has the new name
        """
        role = self.get_role(role_id)

        updates: dict[str, Any] = {}
        if permissions is not None:
            updates["permissions"] = self.catalog.validate(permissions)
        if description is not None:
            updates["description"] = description
        if name is not None:
            updates["name"] = name

        if not updates:
            return role

        updated = _build_role(
            **{**role.model_dump(), **updates, "updated_at": datetime.now(UTC)}
        )

        if updated.name != role.name:
            existing = self.repo.get_by_name(updated.name)
            if existing is not None and existing.id != role.id:
                raise DuplicateRoleNameError(updated.name)

        self.repo.replace(updated)
        logger.info(
            "role_updated",
            role_id=str(role.id),
            role_name=updated.name,
            fields=sorted(updates),
        )
        return updated

    def delete_role(self, role_id: UUID) -> None:
        """Delete a role.

        Users that still name the role simply stop receiving its permissions.

        Raises:
            RoleNotFoundError: If the role does not exist
        """
        role = self.repo.get(role_id)
        if role is None or not self.repo.delete(role_id):
            raise RoleNotFoundError(role_id)
        logger.info("role_deleted", role_id=str(role_id), role_name=role.name)

    def seed_roles(self, definitions: Iterable[Mapping[str, Any]]) -> list[Role]:
        """Create default roles, or reset the permissions of existing ones.

        Every definition is validated before anything is written.

        Args:
            definitions: Mappings with ``name``, ``description`` and
                ``permissions`` keys

        Returns:
            The created or updated roles, in input order
        """
        definitions = list(definitions)
        for definition in definitions:
            self.catalog.validate(definition.get("permissions", ()))

        seeded: list[Role] = []
        for definition in definitions:
            existing = self.repo.get_by_name(definition["name"])
            if existing is None:
                seeded.append(
                    self.create_role(
                        definition["name"],
                        definition.get("description", ""),
                        definition.get("permissions", ()),
                    )
                )
            else:
                seeded.append(
                    self.update_role(
                        existing.id,
                        permissions=definition.get("permissions", ()),
                    )
                )
        return seeded
