"""Role-based permissions: catalog, role store and resolver."""

from portal_access.permissions.catalog import (
    CATALOG,
    Category,
    Permission,
    PermissionCatalog,
)
from portal_access.permissions.checker import PermissionChecker
from portal_access.permissions.models import Role
from portal_access.permissions.repos import InMemoryRoleRepo, RoleRepo
from portal_access.permissions.seeds import DEFAULT_ROLES
from portal_access.permissions.services import RoleService


__all__ = [
    "CATALOG",
    "Category",
    "DEFAULT_ROLES",
    "InMemoryRoleRepo",
    "Permission",
    "PermissionCatalog",
    "PermissionChecker",
    "Role",
    "RoleRepo",
    "RoleService",
]
