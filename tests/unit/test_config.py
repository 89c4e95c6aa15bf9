"""
Unit tests for service settings.
Follows Single Responsibility Principle - tests only configuration loading.
"""
import pytest
from pydantic import ValidationError

from shareable.core.config import DEFAULT_BROWSER_ARGS, Settings


class TestSettings:
    """Test class for environment driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test default settings with no environment overrides."""
        # Arrange
        for name in ("ALLOWED_HOSTS", "PORT", "NAVIGATION_TIMEOUT_MS", "SETTLE_DELAY_MS", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        # Act
        config = Settings(_env_file=None)

        # Assert
        assert config.PORT == 7777
        assert config.ALLOWED_HOSTS == ""
        assert config.NAVIGATION_TIMEOUT_MS == 30000
        assert config.SETTLE_DELAY_MS == 500
        assert config.BROWSER_ARGS == DEFAULT_BROWSER_ARGS
        assert config.ALL_CORS_ORIGINS == ["*"]

    def test_reads_environment(self, monkeypatch):
        """Test that settings are read from environment variables."""
        # Arrange
        monkeypatch.setenv("ALLOWED_HOSTS", "https://example.com,https://example.org")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.com, https://b.com")

        # Act
        config = Settings(_env_file=None)

        # Assert
        assert config.ALLOWED_HOSTS == "https://example.com,https://example.org"
        assert config.PORT == 8080
        assert config.ALL_CORS_ORIGINS == ["https://a.com", "https://b.com"]

    def test_log_level_is_normalised(self, monkeypatch):
        """Test that the log level is upper-cased."""
        # Arrange
        monkeypatch.setenv("LOG_LEVEL", "debug")

        # Act & Assert
        assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch):
        """Test that an unknown log level is rejected."""
        # Arrange
        monkeypatch.setenv("LOG_LEVEL", "loud")

        # Act & Assert
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
