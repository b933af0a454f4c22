"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI and the required-variable
check used before any external collaborator is built.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from legalchat.configs.base import BaseSettings, ServiceSettings
from legalchat.configs.http import HttpSettings, RetrySettings
from legalchat.configs.model_service import ModelServiceSettings
from legalchat.configs.retrieval import DiagnosticSettings, RetrievalSettings
from legalchat.configs.search import SearchSettings
from legalchat.configs.storage import StorageSettings
from legalchat.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    app_name: str = Field(default="legalchat", description="Service name reported by diagnostics")

    # Aggregated settings
    search: SearchSettings = Field(default_factory=SearchSettings)
    model_service: ModelServiceSettings = Field(default_factory=ModelServiceSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    diagnostic: DiagnosticSettings = Field(default_factory=DiagnosticSettings)

    def missing_env_vars(self, *groups: ServiceSettings) -> list[str]:
        """
        Collect missing required variables across settings groups.

        Args:
            *groups: Groups to check (all service groups when omitted)

        Returns:
            list[str]: Env var names in group order
        """
        targets = groups or (self.search, self.model_service, self.storage)
        missing: list[str] = []
        for group in targets:
            missing.extend(group.missing_env_vars())
        return missing

    def require(self, *groups: ServiceSettings) -> None:
        """
        Fail fast when a required variable is absent.

        Args:
            *groups: Groups whose required fields must be set

        Raises:
            ConfigurationError: One or more required variables missing
        """
        missing = self.missing_env_vars(*groups)
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}",
                missing=missing,
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from legalchat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
