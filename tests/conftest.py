"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
from structlog.testing import capture_logs

from portal_access.access.engine import AccessDecisionEngine
from portal_access.config import Settings
from portal_access.permissions.catalog import CATALOG, PermissionCatalog
from portal_access.permissions.checker import PermissionChecker
from portal_access.permissions.repos import InMemoryRoleRepo
from portal_access.permissions.services import RoleService
from portal_access.profiles import UserAuthProfile


ProfileFactory = Callable[..., UserAuthProfile]


@pytest.fixture
def catalog() -> PermissionCatalog:
    """The portal's permission catalog."""
    return CATALOG


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def role_repo() -> InMemoryRoleRepo:
    """Empty in-memory role store."""
    return InMemoryRoleRepo()


@pytest.fixture
def role_service(role_repo: InMemoryRoleRepo, catalog: PermissionCatalog) -> RoleService:
    """Role service over the in-memory store."""
    return RoleService(role_repo, catalog)


@pytest.fixture
def checker(
    role_repo: InMemoryRoleRepo,
    catalog: PermissionCatalog,
    settings: Settings,
) -> PermissionChecker:
    """Permission checker sharing the role store with ``role_service``."""
    return PermissionChecker(role_repo, catalog, settings)


@pytest.fixture
def engine(checker: PermissionChecker) -> AccessDecisionEngine:
    """Decision engine over the shared checker."""
    return AccessDecisionEngine(checker)


@pytest.fixture
def log_output() -> Iterator[list[dict[str, Any]]]:
    """Capture structlog events at every level."""
    structlog.reset_defaults()
    with capture_logs() as logs:
        yield logs
    structlog.reset_defaults()


@pytest.fixture
def make_profile() -> ProfileFactory:
    """Factory for user profiles with sensible defaults."""

    def _make(
        user_id: str = "user-1",
        departments: Iterable[str] = ("ADMINISTRATIVA",),
        roles: Iterable[str] = (),
        permissions: Iterable[str] = (),
    ) -> UserAuthProfile:
        return UserAuthProfile(
            user_id=user_id,
            departments=frozenset(departments),
            role_names=frozenset(roles),
            direct_permissions=frozenset(permissions),
        )

    return _make


@pytest.fixture
def policy_file(tmp_path: Path) -> Path:
    """Write a small policy file covering files, articles and job postings."""
    path = tmp_path / "policy.yaml"
    path.write_text(
        """
roles:
  - name: Editor
    description: Knowledge base editor
    permissions: [knowledge:view, knowledge:create, knowledge:edit_own]
  - name: Reader
    permissions: [files:view, knowledge:view, jobs:view]
  - name: Recruiter
    permissions: [jobs:view, jobs:edit, jobs:manage]

profiles:
  - user_id: ana
    departments: [ADMINISTRATIVA]
    roles: [Editor, Reader]
  - user_id: bruno
    departments: [OPERACIONAL]
    roles: [Reader]
  - user_id: carla
    departments: [ADMINISTRATIVA]
    roles: [Recruiter]

nodes:
  - kind: folder
    id: ops
    owner_id: bruno
    name: Operations
    visible_departments: [OPERACIONAL]
  - kind: folder
    id: shared
    owner_id: bruno
    name: Shared
    visible_departments: [TODOS]
  - kind: file
    id: manual
    owner_id: bruno
    parent_id: shared
    name: manual.pdf
    visible_departments: [TODOS]
  - kind: file
    id: payroll
    owner_id: bruno
    parent_id: shared
    name: payroll.xlsx
    visible_departments: [OPERACIONAL]
  - kind: article
    id: onboarding
    owner_id: ana
    title: Onboarding
  - kind: article
    id: safety
    owner_id: bruno
    title: Safety rules
  - kind: job_posting
    id: analyst
    owner_id: carla
    title: Analyst
    active: false
"""
    )
    return path
