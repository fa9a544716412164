"""Permission checking logic.

This module computes a user's effective permission set from their roles and
direct grants, and answers whether that set contains a given key.
Every check is recomputed from the current role store; nothing is cached.
"""

from collections.abc import Iterable

import structlog

from portal_access.config import Settings, get_settings
from portal_access.core.errors import UnknownPermissionError
from portal_access.permissions.catalog import CATALOG, PermissionCatalog
from portal_access.permissions.repos import RoleRepo
from portal_access.profiles import UserAuthProfile


logger = structlog.get_logger()


class PermissionChecker:
    """Service for checking user permissions.

    Evaluates whether a profile holds specific permissions based on its
    assigned roles and direct grants.
    """

    def __init__(
        self,
        repo: RoleRepo,
        catalog: PermissionCatalog = CATALOG,
        settings: Settings | None = None,
    ) -> None:
        self.repo = repo
        self.catalog = catalog
        self.settings = settings or get_settings()

    def effective_permissions(self, profile: UserAuthProfile) -> frozenset[str]:
        """Get all permissions for a user.

        Roles named by the profile that no longer exist are skipped, the
        configured superuser role included. Direct grants that are not in the
        catalog are dropped.

        Args:
            profile: The user's authorization profile

        Returns:
            Union of role permissions and direct grants
        """
        superuser_role = self.settings.superuser_role
        if (
            superuser_role
            and superuser_role in profile.role_names
            and self.repo.get_by_name(superuser_role) is not None
        ):
            logger.debug(
                "superuser_bypass",
                user_id=profile.user_id,
                role_name=superuser_role,
            )
            return self.catalog.all_keys()

        permissions: set[str] = set()

        for name in profile.role_names:
            role = self.repo.get_by_name(name)
            if role is None:
                logger.debug(
                    "dangling_role_reference",
                    user_id=profile.user_id,
                    role_name=name,
                )
                continue
            permissions.update(role.permissions)

        for key in profile.direct_permissions:
            if self.catalog.exists(key):
                permissions.add(key)
            else:
                logger.warning(
                    "unknown_direct_permission",
                    user_id=profile.user_id,
                    permission=key,
                )

        # Roles are validated on write, but the catalog may shrink between deploys
        return frozenset(permissions) & self.catalog.all_keys()

    def has_permission(self, profile: UserAuthProfile, key: str) -> bool:
        """Check if a user has a specific permission.

        Args:
            profile: The user's authorization profile
            key: Permission key, e.g. "files:delete_any"

        Returns:
            True if the key is in the user's effective permission set

        Raises:
            UnknownPermissionError: If the key is not in the catalog
        """
        self._require_known([key])
        return key in self.effective_permissions(profile)

    def has_any_permission(self, profile: UserAuthProfile, keys: Iterable[str]) -> bool:
        """Check if a user has at least one of the given permissions."""
        keys = list(keys)
        self._require_known(keys)
        effective = self.effective_permissions(profile)
        return any(key in effective for key in keys)

    def has_all_permissions(self, profile: UserAuthProfile, keys: Iterable[str]) -> bool:
        """Check if a user has every one of the given permissions."""
        keys = list(keys)
        self._require_known(keys)
        effective = self.effective_permissions(profile)
        return all(key in effective for key in keys)

    def _require_known(self, keys: list[str]) -> None:
        unknown = [key for key in keys if not self.catalog.exists(key)]
        if unknown:
            raise UnknownPermissionError(unknown)
