"""Content node model.

Nodes are the shared shape of everything the portal guards: folders, files
and links in the file storage tree, plus flat collections (institutional
areas, job postings, knowledge articles). Only the fields access control
needs are modeled here.
"""

from collections.abc import Iterable, Iterator
from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)

from portal_access.config import get_settings
from portal_access.core.errors import NotFoundError, ValidationError


class Visibility(BaseModel):
    """Which departments may discover a node.

    Either every department (``everyone()``) or an explicit set
    (``only(...)``), never both. The stored ``["TODOS"]`` form is translated
    only in ``from_stored`` and ``to_stored``.
    """

    model_config = ConfigDict(frozen=True)

    all_departments: bool = False
    departments: frozenset[str] = Field(default_factory=frozenset)

    @model_validator(mode="after")
    def check_exclusive(self) -> "Visibility":
        if self.all_departments and self.departments:
            raise ValueError("all_departments excludes an explicit department list")
        token = get_settings().all_departments_token
        if token in self.departments:
            raise ValueError(f"'{token}' must be expressed as all_departments")
        return self

    @classmethod
    def everyone(cls) -> "Visibility":
        return cls(all_departments=True)

    @classmethod
    def only(cls, *departments: str) -> "Visibility":
        return cls(departments=frozenset(departments))

    @classmethod
    def from_stored(
        cls,
        values: Iterable[str] | None,
        *,
        strict: bool | None = None,
    ) -> "Visibility":
        """Translate a stored department list.

        Args:
            values: Stored list, e.g. ``["TODOS"]`` or ``["OPERACIONAL"]``,
                or None when the field was never stored
            strict: Reject lists mixing the token with department names.
                Defaults to the ``strict_visibility`` setting; when False the
                mix collapses to ``everyone()``.

        Returns:
            The internal visibility value. A missing list is visible to
            everyone, like a node built without visibility; an empty list
            is visible to nobody.

        Raises:
            ValidationError: For a mixed list in strict mode
        """
        settings = get_settings()
        token = settings.all_departments_token
        strict = settings.strict_visibility if strict is None else strict

        if values is None:
            return cls.everyone()

        names = frozenset(v.strip() for v in values if v and v.strip())
        if token not in names:
            return cls(departments=names)

        if len(names) > 1 and strict:
            raise ValidationError(
                "Invalid department visibility",
                errors=[
                    {
                        "field": "visible_departments",
                        "message": f"'{token}' cannot be combined with departments",
                    }
                ],
            )
        return cls.everyone()

    def to_stored(self) -> list[str]:
        """Return the persisted list form."""
        if self.all_departments:
            return [get_settings().all_departments_token]
        return sorted(self.departments)

    def admits(self, departments: Iterable[str]) -> bool:
        """Check whether any of the given departments may see the node."""
        if self.all_departments:
            return True
        return not self.departments.isdisjoint(departments)


class ContentNode(BaseModel):
    """Fields shared by every guarded content item.

    Attributes:
        id: Node identifier
        owner_id: User who authored or uploaded the node
        visibility: Departments allowed to discover the node
        active: Whether the node is published
        parent_id: Containing folder, for file storage nodes only
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Permission category whose manage key may bypass the inactive check
    category: ClassVar[str]
    # Whether the node can live inside a folder
    hierarchical: ClassVar[bool] = False

    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    visibility: Visibility = Field(
        default_factory=Visibility.everyone,
        validation_alias=AliasChoices("visibility", "visible_departments"),
    )
    active: bool = True
    parent_id: str | None = None

    @field_validator("visibility", mode="before")
    @classmethod
    def parse_stored_visibility(cls, v: Any) -> Any:
        """Accept the stored list form as input."""
        if v is None or isinstance(v, list | tuple | set | frozenset):
            return Visibility.from_stored(v)
        return v

    @model_validator(mode="after")
    def check_parent(self) -> "ContentNode":
        if self.parent_id is not None and not self.hierarchical:
            raise ValueError(f"{type(self).__name__} cannot have a parent folder")
        if self.parent_id == self.id:
            raise ValueError("A node cannot be its own parent")
        return self


class Folder(ContentNode):
    category: ClassVar[str] = "files"
    hierarchical: ClassVar[bool] = True

    kind: Literal["folder"] = "folder"
    name: str = ""


class File(ContentNode):
    category: ClassVar[str] = "files"
    hierarchical: ClassVar[bool] = True

    kind: Literal["file"] = "file"
    name: str = ""


class Link(ContentNode):
    category: ClassVar[str] = "files"
    hierarchical: ClassVar[bool] = True

    kind: Literal["link"] = "link"
    name: str = ""
    url: str = ""


class InstitutionalArea(ContentNode):
    category: ClassVar[str] = "institutional"

    kind: Literal["institutional_area"] = "institutional_area"
    title: str = ""
    order: int = 0


class JobPosting(ContentNode):
    category: ClassVar[str] = "jobs"

    kind: Literal["job_posting"] = "job_posting"
    title: str = ""
    order: int = 0


class Article(ContentNode):
    category: ClassVar[str] = "knowledge"

    kind: Literal["article"] = "article"
    title: str = ""


AnyContentNode = Annotated[
    Folder | File | Link | InstitutionalArea | JobPosting | Article,
    Field(discriminator="kind"),
]

_node_adapter: TypeAdapter[AnyContentNode] = TypeAdapter(AnyContentNode)


def parse_node(data: dict[str, Any]) -> ContentNode:
    """Build the right node type from a mapping with a ``kind`` key."""
    return _node_adapter.validate_python(data)


def owner(node: ContentNode) -> str:
    return node.owner_id


def visibility(node: ContentNode) -> Visibility:
    return node.visibility


def is_active(node: ContentNode) -> bool:
    return node.active


class ContentTree:
    """Index of nodes answering structural queries.

    The tree never propagates visibility; it only knows who contains whom.
    """

    def __init__(self, nodes: Iterable[ContentNode] = ()) -> None:
        self._nodes: dict[str, ContentNode] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: ContentNode) -> None:
        """Add a node.

        Raises:
            ValidationError: If a node with the same id exists
        """
        if node.id in self._nodes:
            raise ValidationError(
                "Duplicate node id",
                errors=[{"field": "id", "message": f"'{node.id}' already exists"}],
            )
        self._nodes[node.id] = node

    def get(self, node_id: str) -> ContentNode:
        """Get a node by id.

        Raises:
            NotFoundError: If the node is not in the tree
        """
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NotFoundError(resource="node", resource_id=node_id) from None

    def children(self, folder_id: str | None) -> list[ContentNode]:
        """List nodes directly inside a folder, or at the root for None."""
        return [
            node
            for node in self._nodes.values()
            if node.hierarchical and node.parent_id == folder_id
        ]

    def ancestors(self, node: ContentNode) -> list[Folder]:
        """Return containing folders from the immediate parent to the root.

        Flat collection items have no ancestors.

        Raises:
            NotFoundError: If a parent id is not in the tree
            ValidationError: If the chain loops or passes through a non-folder
        """
        if not node.hierarchical:
            return []

        chain: list[Folder] = []
        seen = {node.id}
        parent_id = node.parent_id
        while parent_id is not None:
            if parent_id in seen:
                raise ValidationError(
                    "Folder hierarchy contains a cycle",
                    details={"node_id": node.id, "repeated_id": parent_id},
                )
            seen.add(parent_id)
            parent = self.get(parent_id)
            if not isinstance(parent, Folder):
                raise ValidationError(
                    "Parent is not a folder",
                    details={"node_id": node.id, "parent_id": parent_id},
                )
            chain.append(parent)
            parent_id = parent.parent_id
        return chain

    def __iter__(self) -> Iterator[ContentNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
