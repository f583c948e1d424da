"""Configuration loading for spacecopy.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Kibana connection
    kibana_url: str = Field(
        default="http://localhost:5601",
        description="Kibana base URL",
    )
    kibana_username: str = Field(
        default="",
        description="Kibana user for basic authentication",
    )
    kibana_password: str = Field(
        default="",
        description="Kibana password for basic authentication",
    )
    kibana_api_key: str = Field(
        default="",
        description="Kibana API key (takes precedence over basic authentication)",
    )
    kibana_timeout_seconds: float = Field(
        default=30.0,
        description="Kibana request timeout in seconds",
    )
    kibana_verify_tls: bool = Field(
        default=True,
        description="Verify Kibana TLS certificates",
    )

    # Local tracking state
    state_path: str = Field(
        default="./spacecopy.state.json",
        description="Path to the JSON state file",
    )

    # Run mode
    run_mode: Literal["apply", "destroy", "show", "list"] = Field(
        default="apply",
        description="Run mode",
    )
    declaration_path: str = Field(
        default="./spacecopy.json",
        description="Path to the JSON declaration file (apply mode)",
    )
    resource_name: str = Field(
        default="",
        description="Resource name for destroy and show modes",
    )
    force_update: bool = Field(
        default=False,
        description="Force a re-copy of every declared resource",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("kibana_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure request timeout is positive."""
        if v <= 0:
            raise ValueError("kibana_timeout_seconds must be positive")
        return v

    @field_validator("kibana_url")
    @classmethod
    def validate_kibana_url(cls, v: str) -> str:
        """Ensure the Kibana URL carries an HTTP scheme."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("kibana_url must start with http:// or https://")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_resource_name(self) -> "Settings":
        """Require a resource name for modes that target one resource."""
        if self.run_mode in ("destroy", "show") and not self.resource_name:
            raise ValueError(f"resource_name is required in {self.run_mode} mode")
        return self


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
