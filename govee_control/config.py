"""
Centralized configuration management using Pydantic Settings.

Configuration is loaded from environment variables with sensible defaults.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .capabilities.backends.platform import DEFAULT_BASE_URL


class GoveeApiConfig(BaseSettings):
    """Govee Platform API configuration."""

    model_config = SettingsConfigDict(env_prefix="GOVEE_", env_file=".env", extra="ignore")

    api_key: Optional[str] = Field(default=None, description="Govee Platform API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Govee Platform API base URL")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_prefix="GOVEE_CONTROL_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="WARNING", description="Logging level")

    api: GoveeApiConfig = Field(default_factory=GoveeApiConfig)


# Singleton settings instance
settings = Settings()
