"""Policy fixture files.

A policy file is a YAML snapshot of roles, user profiles and content nodes.
Operators use it with the CLI to reproduce and explain access decisions
without a running portal.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from portal_access.access.engine import AccessDecisionEngine
from portal_access.content.models import ContentTree, parse_node
from portal_access.core.errors import NotFoundError, ValidationError
from portal_access.permissions.catalog import CATALOG, PermissionCatalog
from portal_access.permissions.checker import PermissionChecker
from portal_access.permissions.repos import InMemoryRoleRepo
from portal_access.permissions.services import RoleService
from portal_access.profiles import UserAuthProfile


class RoleSpec(BaseModel):
    """Role entry of a policy file."""

    name: str = Field(..., description="Unique role name")
    description: str = Field("", description="Human-readable description")
    permissions: list[str] = Field(default_factory=list, description="Permission keys")


class ProfileSpec(BaseModel):
    """User entry of a policy file."""

    user_id: str = Field(..., description="User identifier")
    departments: list[str] = Field(default_factory=list)
    roles: list[str] = Field(default_factory=list, description="Assigned role names")
    permissions: list[str] = Field(
        default_factory=list, description="Direct permission grants"
    )


class PolicyFile(BaseModel):
    """Top-level structure of a policy file."""

    roles: list[RoleSpec] = Field(default_factory=list)
    profiles: list[ProfileSpec] = Field(default_factory=list)
    nodes: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Content nodes with a 'kind' key and stored visibility lists",
    )


@dataclass
class Policy:
    """Loaded policy wired to a role store and decision engine."""

    roles: RoleService
    checker: PermissionChecker
    engine: AccessDecisionEngine
    tree: ContentTree
    profiles: dict[str, UserAuthProfile] = field(default_factory=dict)

    def profile(self, user_id: str) -> UserAuthProfile:
        """Get a profile by user id.

        Raises:
            NotFoundError: If the user is not in the policy
        """
        try:
            return self.profiles[user_id]
        except KeyError:
            raise NotFoundError(
                "User not found", resource="user", resource_id=user_id
            ) from None


def build_policy(data: PolicyFile, catalog: PermissionCatalog = CATALOG) -> Policy:
    """Build a policy from parsed file data.

    Roles go through ``RoleService.create_role`` so unknown permissions and
    duplicate names fail the same way they would in the portal.
    """
    roles = RoleService(InMemoryRoleRepo(), catalog)
    for spec in data.roles:
        roles.create_role(spec.name, spec.description, spec.permissions)

    checker = PermissionChecker(roles.repo, catalog)
    engine = AccessDecisionEngine(checker, catalog)

    profiles: dict[str, UserAuthProfile] = {}
    for spec in data.profiles:
        if spec.user_id in profiles:
            raise ValidationError(
                "Duplicate user id",
                errors=[{"field": "user_id", "message": spec.user_id}],
            )
        profiles[spec.user_id] = UserAuthProfile(
            user_id=spec.user_id,
            departments=frozenset(spec.departments),
            role_names=frozenset(spec.roles),
            direct_permissions=frozenset(spec.permissions),
        )

    tree = ContentTree(parse_node(node) for node in data.nodes)

    return Policy(
        roles=roles,
        checker=checker,
        engine=engine,
        tree=tree,
        profiles=profiles,
    )


def load_policy(path: Path, catalog: PermissionCatalog = CATALOG) -> Policy:
    """Load a policy file from disk.

    Args:
        path: Path to the YAML file

    Returns:
        The loaded policy

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid policy
    """
    if not path.exists():
        raise FileNotFoundError(f"Policy file '{path}' not found")

    with path.open() as f:
        raw = yaml.safe_load(f) or {}

    try:
        data = PolicyFile(**raw)
    except Exception as e:
        raise ValueError(f"Invalid policy file: {e}") from e

    return build_policy(data, catalog)
