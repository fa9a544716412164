"""Package configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from portal_access.constants import DEFAULT_ALL_DEPARTMENTS_TOKEN


class Settings(BaseSettings):
    """Settings loaded from environment variables prefixed with PORTAL_ACCESS_."""

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_ACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"

    # Reserved token the department selector stores for "all departments"
    all_departments_token: str = DEFAULT_ALL_DEPARTMENTS_TOKEN

    # Role name that receives every catalog permission (disabled when None)
    superuser_role: str | None = None

    # Reject stored visibility lists mixing the token with department names
    strict_visibility: bool = True

    @field_validator("all_departments_token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate that the sentinel token is a usable value.

        Args:
            v: The configured token

        Returns:
            The stripped token

        Raises:
            ValueError: If the token is blank
        """
        v = v.strip()
        if not v:
            raise ValueError("ALL_DEPARTMENTS_TOKEN must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
