"""
Configuration for the Shareable render service.
Values are read from the environment (or a local .env file) once at import time.
"""
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BROWSER_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--no-first-run',
    '--no-zygote',
    '--disable-gpu'
]


class Settings(BaseSettings):
    """Service settings with environment variable support."""

    APP_NAME: str = "Shareable Render Service"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 7777

    # Comma-separated browser origins allowed to call the API
    CORS_ORIGINS: str = ""

    # Comma-separated origins that may be rendered; empty or "*" allows every host
    ALLOWED_HOSTS: str = ""

    CACHE_DIR: Path = Field(default_factory=lambda: Path.cwd() / ".cache")

    NAVIGATION_TIMEOUT_MS: int = 30000
    SETTLE_DELAY_MS: int = 500
    BROWSER_HEADLESS: bool = True
    # JSON list when set from the environment
    BROWSER_ARGS: List[str] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @property
    def ALL_CORS_ORIGINS(self) -> List[str]:
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return origins or ["*"]


settings = Settings()
