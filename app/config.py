"""
StudyMate application configuration

This module holds all application settings:
- Server settings
- Delays of the simulated sign-in and profile save operations
- Candidate fixture location
- CORS and rate limiting

Values are read from environment variables or the .env file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.errors import ConfigurationError


DEFAULT_CANDIDATES_PATH = os.path.join(
    os.path.dirname(__file__), "startup", "candidates.json"
)


class Settings(BaseSettings):
    """
    Application settings

    All values come from environment variables or the .env file
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")

    @property
    def port(self) -> int:
        """Port to bind (priority: PORT > APP_PORT > 8000)"""
        return int(os.getenv("PORT", os.getenv("APP_PORT", self.app_port)))

    # Simulated asynchronous operations
    sign_in_delay_ms: int = Field(default=1000, alias="SIGN_IN_DELAY_MS")
    profile_save_delay_ms: int = Field(default=1500, alias="PROFILE_SAVE_DELAY_MS")

    # Candidate fixtures
    candidates_fixture_path: str = Field(
        default=DEFAULT_CANDIDATES_PATH,
        alias="CANDIDATES_FIXTURE_PATH",
        description="JSON file with the seeded candidate study partners"
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        alias="CORS_ORIGINS",
        description="Comma-separated list of allowed origins. Use '*' for all (not recommended for production)"
    )

    # Rate limiting
    rate_limit_requests: int = Field(default=100, alias="RATE_LIMIT_REQUESTS")
    rate_limit_window: int = Field(default=60, alias="RATE_LIMIT_WINDOW")  # seconds

    # Page sessions idle longer than this are closed and evicted
    session_ttl_seconds: int = Field(default=1800, alias="SESSION_TTL_SECONDS")

    def get_cors_origins_list(self) -> list[str]:
        """Allowed CORS origins"""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def validate_required(self) -> None:
        """Validate settings the application cannot run without"""
        errors = []

        if self.sign_in_delay_ms < 0:
            errors.append("SIGN_IN_DELAY_MS must not be negative")
        if self.profile_save_delay_ms < 0:
            errors.append("PROFILE_SAVE_DELAY_MS must not be negative")
        if self.session_ttl_seconds <= 0:
            errors.append("SESSION_TTL_SECONDS must be positive")
        if not os.path.exists(self.candidates_fixture_path):
            errors.append(f"CANDIDATES_FIXTURE_PATH does not exist: {self.candidates_fixture_path}")
        if self.app_env == "production" and self.cors_origins == "*":
            errors.append("CORS_ORIGINS must be restricted for production")

        if errors:
            raise ConfigurationError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get settings (cached)

    Returns:
        Settings object
    """
    return Settings()  # type: ignore[call-arg]
