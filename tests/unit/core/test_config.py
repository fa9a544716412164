"""Unit tests for settings."""

import pytest
from pydantic import ValidationError

from portal_access.config import Settings, get_settings


pytestmark = pytest.mark.unit


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, settings: Settings):
        assert settings.all_departments_token == "TODOS"
        assert settings.superuser_role is None
        assert settings.strict_visibility is True
        assert settings.log_level == "INFO"
        assert settings.is_production is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORTAL_ACCESS_ENVIRONMENT", "production")
        monkeypatch.setenv("PORTAL_ACCESS_SUPERUSER_ROLE", "Admin")
        monkeypatch.setenv("PORTAL_ACCESS_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.is_production is True
        assert settings.superuser_role == "Admin"
        assert settings.log_level == "DEBUG"

    def test_token_is_stripped(self):
        settings = Settings(_env_file=None, all_departments_token=" ALL ")

        assert settings.all_departments_token == "ALL"

    def test_blank_token_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, all_departments_token="  ")

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
