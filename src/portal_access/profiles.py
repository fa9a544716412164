"""User authorization profile.

Profiles are produced by the identity subsystem after authentication and are
only read here.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal_access.config import get_settings


class UserAuthProfile(BaseModel):
    """Authorization-relevant view of an authenticated user.

    Attributes:
        user_id: Identifier compared against content owners
        departments: Departments the user belongs to (normally one)
        role_names: Names of the roles assigned to the user
        direct_permissions: Permission keys granted to this user alone
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    departments: frozenset[str] = Field(default_factory=frozenset)
    role_names: frozenset[str] = Field(default_factory=frozenset)
    direct_permissions: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("departments")
    @classmethod
    def validate_departments(cls, v: frozenset[str]) -> frozenset[str]:
        """Reject the all-departments token in a user's own departments."""
        token = get_settings().all_departments_token
        if token in v:
            raise ValueError(
                f"'{token}' is a visibility marker, not a department a user can belong to"
            )
        return v

    def with_direct_permissions(self, *keys: str) -> "UserAuthProfile":
        """Return a copy with extra direct grants layered on top."""
        return self.model_copy(
            update={"direct_permissions": self.direct_permissions | frozenset(keys)}
        )
