"""
Application settings using Pydantic.

Provides environment-based configuration loading with OCEANHOST_ prefix.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OCEANHOST_",
        extra="ignore",
    )

    # App Platform defaults (used when the app model doesn't say otherwise)
    app_name: str = "oceanhost-app"
    region: str = "nyc"
    instance_size_slug: str = "apps-s-1vcpu-0.5gb"
    instance_count: int = Field(default=1, ge=1)

    # Publishing
    output_dir: str | None = None
    spec_file_name: str = "app-spec.yaml"
    script_file_name: str = "deploy-appplatform.sh"

    # Git discovery
    git_executable: str = "git"
    git_timeout_seconds: float = Field(default=5.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
