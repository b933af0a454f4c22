"""
Base configuration settings.

Provides common configuration inherited by all specific config modules.
Handles environment detection, shared defaults and required-field reporting.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )


class ServiceSettings(PydanticBaseSettings):
    """
    Settings group for one external collaborator.

    Subclasses list the fields that must be non-empty in ``required_fields``
    so that missing configuration is reported by environment variable name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    required_fields: ClassVar[tuple[str, ...]] = ()

    def missing_env_vars(self) -> list[str]:
        """
        List environment variables for required fields that are empty.

        Returns:
            list[str]: Upper-case env var names (prefix + field name)
        """
        prefix = self.model_config.get("env_prefix", "")
        return [
            f"{prefix}{name}".upper()
            for name in self.required_fields
            if not str(getattr(self, name) or "").strip()
        ]
