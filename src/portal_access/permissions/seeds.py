"""Default roles installed on a fresh portal."""

from typing import Any


DEFAULT_ROLES: tuple[dict[str, Any], ...] = (
    {
        "name": "admin",
        "description": "System administrator with full access",
        "permissions": (
            "admin:access",
            "users:view", "users:create", "users:edit", "users:delete",
            "roles:manage",
            "timeline:view", "timeline:create", "timeline:edit_own",
            "timeline:delete_own", "timeline:delete_any", "timeline:comment",
            "timeline:delete_comment_own", "timeline:delete_comment_any",
            "files:view", "files:upload", "files:download", "files:delete_own",
            "files:delete_any", "files:create_folder", "files:share",
            "knowledge:view", "knowledge:create", "knowledge:edit_own",
            "knowledge:edit_any", "knowledge:delete_own", "knowledge:delete_any",
            "banners:view", "banners:create", "banners:edit", "banners:delete",
        ),
    },
    {
        "name": "editor",
        "description": "Content editor",
        "permissions": (
            "timeline:view", "timeline:create", "timeline:edit_own",
            "timeline:delete_own", "timeline:comment", "timeline:delete_comment_own",
            "files:view", "files:upload", "files:download", "files:delete_own",
            "files:create_folder", "files:share",
            "knowledge:view", "knowledge:create", "knowledge:edit_own",
            "knowledge:delete_own",
        ),
    },
    {
        "name": "user",
        "description": "Regular user",
        "permissions": (
            "timeline:view", "timeline:comment",
            "files:view", "files:download",
            "knowledge:view",
        ),
    },
)
