"""Role storage.

The host application supplies persistence; ``RoleRepo`` is the contract the
service depends on. ``InMemoryRoleRepo`` backs tests, the CLI and
single-process deployments.
"""

import threading
from typing import Protocol
from uuid import UUID

from portal_access.core.errors import DuplicateRoleNameError
from portal_access.permissions.models import Role


class RoleRepo(Protocol):
    """Storage contract for roles.

    Implementations must offer read-your-writes consistency within a request.
    Concurrent writers to the same role race and the last write wins, but
    ``add`` and ``replace`` must reject a name held by another role id with
    ``DuplicateRoleNameError``, atomically with the write.
    """

    def get(self, role_id: UUID) -> Role | None: ...

    def get_by_name(self, name: str) -> Role | None: ...

    def list(self) -> list[Role]: ...

    def add(self, role: Role) -> Role: ...

    def replace(self, role: Role) -> Role: ...

    def delete(self, role_id: UUID) -> bool: ...


class InMemoryRoleRepo:
    """Dict-backed role repository guarded by a lock."""

    def __init__(self, roles: list[Role] | None = None) -> None:
        self._lock = threading.Lock()
        self._roles: dict[UUID, Role] = {}
        for role in roles or []:
            self._roles[role.id] = role

    def get(self, role_id: UUID) -> Role | None:
        with self._lock:
            return self._roles.get(role_id)

    def get_by_name(self, name: str) -> Role | None:
        """Get a role by exact name."""
        with self._lock:
            for role in self._roles.values():
                if role.name == name:
                    return role
        return None

    def list(self) -> list[Role]:
        with self._lock:
            return list(self._roles.values())

    def add(self, role: Role) -> Role:
        """Store a new role.

        Raises:
            DuplicateRoleNameError: If another role already has the name
        """
        with self._lock:
            self._check_name_free(role)
            self._roles[role.id] = role
        return role

    def replace(self, role: Role) -> Role:
        """Overwrite a role by id.

        Raises:
            DuplicateRoleNameError: If another role already has the name
        """
        with self._lock:
            self._check_name_free(role)
            self._roles[role.id] = role
        return role

    def delete(self, role_id: UUID) -> bool:
        """Delete a role.

        Returns:
            True if a role was removed
        """
        with self._lock:
            return self._roles.pop(role_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._roles)

    def _check_name_free(self, role: Role) -> None:
        # Caller holds the lock
        for other in self._roles.values():
            if other.name == role.name and other.id != role.id:
                raise DuplicateRoleNameError(role.name)
