"""Role model.

A role is a named, reusable bundle of permission keys. Roles are independent
of users; profiles reference them by name.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal_access.constants import MAX_DESCRIPTION_LENGTH, MAX_ROLE_NAME_LENGTH


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Role(BaseModel):
    """Immutable snapshot of a role as stored in the role store.

    Attributes:
        id: Role identifier
        name: Unique role name, compared exactly (case-sensitive)
        description: Human-readable description of the role
        permissions: Permission keys granted by the role (may be empty)
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str = Field("", max_length=MAX_DESCRIPTION_LENGTH)
    permissions: frozenset[str] = Field(default_factory=frozenset)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError("Role name must not be blank")
        return v

    def has_permission(self, key: str) -> bool:
        """Check if this role grants a permission key."""
        return key in self.permissions

    def to_stored(self) -> dict[str, object]:
        """Return the persisted shape of the role."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "permissions": sorted(self.permissions),
        }

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"
