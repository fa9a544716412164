"""Static permission catalog for the intranet portal.

The catalog is the only source of valid permission keys. Keys follow the
``category:action`` convention and are declared once here; adding a
permission means extending this module and redeploying.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from portal_access.constants import MANAGE_ACTION, PERMISSION_KEY_SEPARATOR
from portal_access.core.errors import UnknownPermissionError


@dataclass(frozen=True)
class Permission:
    """A single authorizable action."""

    key: str
    description: str

    @property
    def namespace(self) -> str:
        """Return the part of the key before the separator."""
        return self.key.split(PERMISSION_KEY_SEPARATOR, 1)[0]


@dataclass(frozen=True)
class Category:
    """A named group of permissions as shown on the role editor."""

    name: str
    key: str
    permissions: tuple[Permission, ...]


class PermissionCatalog:
    """Read-only registry of permission keys grouped by category."""

    def __init__(self, categories: Iterable[Category]) -> None:
        self._categories = tuple(categories)
        self._permissions: dict[str, Permission] = {}
        for category in self._categories:
            for permission in category.permissions:
                if PERMISSION_KEY_SEPARATOR not in permission.key:
                    raise ValueError(
                        f"Permission key '{permission.key}' is not namespaced"
                    )
                if permission.key in self._permissions:
                    raise ValueError(f"Duplicate permission key '{permission.key}'")
                self._permissions[permission.key] = permission
        self._keys = frozenset(self._permissions)

    def list_categories(self) -> tuple[Category, ...]:
        """Return categories in declaration order."""
        return self._categories

    def get_category(self, key: str) -> Category | None:
        """Return the category with the given key, if declared."""
        for category in self._categories:
            if category.key == key:
                return category
        return None

    def exists(self, key: str) -> bool:
        """Check whether a permission key is declared."""
        return key in self._keys

    def all_keys(self) -> frozenset[str]:
        """Return every declared permission key."""
        return self._keys

    def describe(self, key: str) -> str:
        """Return the human-readable description of a key.

        Raises:
            UnknownPermissionError: If the key is not declared
        """
        try:
            return self._permissions[key].description
        except KeyError:
            raise UnknownPermissionError([key]) from None

    def validate(self, keys: Iterable[str]) -> frozenset[str]:
        """Check that every key is declared.

        Args:
            keys: Permission keys to validate

        Returns:
            The keys as a frozenset

        Raises:
            UnknownPermissionError: Naming every undeclared key
        """
        keys = frozenset(keys)
        unknown = sorted(keys - self._keys)
        if unknown:
            raise UnknownPermissionError(unknown)
        return keys

    def admin_override_key_for(self, category: str) -> str | None:
        """Return the category-level manage key, if the category has one.

        The manage key only lets administrators act on inactive content; it is
        not a wildcard for the category's other permissions.
        """
        key = f"{category}{PERMISSION_KEY_SEPARATOR}{MANAGE_ACTION}"
        return key if key in self._keys else None

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys


def _category(name: str, key: str, *permissions: tuple[str, str]) -> Category:
    return Category(
        name=name,
        key=key,
        permissions=tuple(Permission(k, d) for k, d in permissions),
    )


CATEGORIES: tuple[Category, ...] = (
    _category(
        "Timeline",
        "timeline",
        ("timeline:view", "View posts"),
        ("timeline:create", "Create posts"),
        ("timeline:like", "Like posts"),
        ("timeline:like_comment", "Like comments"),
        ("timeline:edit_own", "Edit own posts"),
        ("timeline:delete_own", "Delete own posts"),
        ("timeline:delete_any", "Delete any post"),
        ("timeline:comment", "Add comments"),
        ("timeline:react", "React to posts with emoji"),
        ("timeline:delete_comment_own", "Delete own comments"),
        ("timeline:delete_comment_any", "Delete any comment"),
    ),
    _category(
        "Files",
        "files",
        ("files:view", "View files"),
        ("files:upload", "Upload files"),
        ("files:download", "Download files"),
        ("files:delete_own", "Delete own files"),
        ("files:delete_any", "Delete any file"),
        ("files:create_folder", "Create folders"),
        ("files:share", "Share files"),
    ),
    _category(
        "Knowledge Base",
        "knowledge",
        ("knowledge:view", "View articles"),
        ("knowledge:create", "Create articles"),
        ("knowledge:edit_own", "Edit own articles"),
        ("knowledge:edit_any", "Edit any article"),
        ("knowledge:delete_own", "Delete own articles"),
        ("knowledge:delete_any", "Delete any article"),
    ),
    _category(
        "Calendar/Events",
        "calendar",
        ("calendar:view", "View calendar"),
        ("calendar:create", "Create events"),
        ("calendar:edit_own", "Edit own events"),
        ("calendar:edit_any", "Edit any event"),
        ("calendar:delete_own", "Delete own events"),
        ("calendar:delete_any", "Delete any event"),
    ),
    _category(
        "Banners",
        "banners",
        ("banners:view", "View banners"),
        ("banners:create", "Create banners"),
        ("banners:edit", "Edit banners"),
        ("banners:delete", "Delete banners"),
        ("banners:manage", "Manage banners"),
    ),
    _category(
        "Institutional",
        "institutional",
        ("institutional:view", "View institutional areas"),
        ("institutional:create", "Create institutional areas"),
        ("institutional:edit", "Edit institutional areas"),
        ("institutional:delete", "Delete institutional areas"),
        (
            "institutional:manage",
            "Manage institutional areas, including ordering and inactive areas",
        ),
    ),
    _category(
        "Useful Links",
        "useful_links",
        ("useful_links:view", "View useful links"),
        ("useful_links:create", "Create useful links"),
        ("useful_links:edit", "Edit useful links"),
        ("useful_links:delete", "Delete useful links"),
        ("useful_links:manage", "Manage all useful links"),
    ),
    _category(
        "Chat",
        "chat",
        ("chat:access", "Access chat"),
        ("chat:create_group", "Create chat groups"),
        ("chat:manage_group", "Manage chat groups"),
    ),
    _category(
        "Administration",
        "admin",
        ("admin:access", "Access the administration area"),
        ("admin:dashboard", "View the administration dashboard"),
        ("users:view", "View users"),
        ("users:create", "Create users"),
        ("users:edit", "Edit users"),
        ("users:delete", "Delete users"),
        ("roles:manage", "Manage roles and permissions"),
    ),
    _category(
        "SuperCoins",
        "supercoins",
        ("supercoins:send_message", "Send a message with an attribute"),
        ("supercoins:manage", "Manage the SuperCoins system"),
    ),
    _category(
        "Job Postings",
        "jobs",
        ("jobs:view", "View job postings"),
        ("jobs:create", "Create job postings"),
        ("jobs:edit", "Edit job postings"),
        ("jobs:delete", "Delete job postings"),
        ("jobs:manage", "Manage all job postings, including ordering and inactive ones"),
    ),
    _category(
        "Courses",
        "courses",
        ("courses:view", "View available courses"),
        ("courses:view_all", "View all courses, including other departments"),
        ("courses:enroll", "Enroll in courses"),
        ("courses:create", "Create courses"),
        ("courses:edit_own", "Edit own courses"),
        ("courses:edit_any", "Edit any course"),
        ("courses:delete_own", "Delete own courses"),
        ("courses:delete_any", "Delete any course"),
        ("courses:manage_lessons", "Add, edit and delete lessons"),
        ("courses:manage_materials", "Manage lesson materials"),
        ("courses:view_progress", "View own progress"),
        ("courses:view_all_progress", "View progress of every user"),
        ("courses:manage_enrollments", "Manage user enrollments"),
        ("courses:view_certificates", "View issued certificates"),
        ("courses:issue_certificates", "Issue completion certificates"),
        ("courses:view_analytics", "View course statistics and reports"),
        ("courses:export_data", "Export course and progress data"),
        ("courses:admin", "Full administration of the course system"),
        ("courses:manage_categories", "Manage course categories"),
        ("courses:moderate_content", "Moderate course content"),
    ),
)

# Global catalog instance
CATALOG = PermissionCatalog(CATEGORIES)
