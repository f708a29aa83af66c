"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # Perforce identity fallbacks
    P4CLIENT: str | None = None
    P4USER: str | None = None

    # Upstream branch the commits to shelve are measured against
    GIT_P4_SHELVE_UPSTREAM: str | None = None
