"""Content nodes and department visibility."""

from portal_access.content.models import (
    AnyContentNode,
    Article,
    ContentNode,
    ContentTree,
    File,
    Folder,
    InstitutionalArea,
    JobPosting,
    Link,
    Visibility,
    is_active,
    owner,
    parse_node,
    visibility,
)
from portal_access.content.visibility import is_visible


__all__ = [
    "AnyContentNode",
    "Article",
    "ContentNode",
    "ContentTree",
    "File",
    "Folder",
    "InstitutionalArea",
    "JobPosting",
    "Link",
    "Visibility",
    "is_active",
    "is_visible",
    "owner",
    "parse_node",
    "visibility",
]
