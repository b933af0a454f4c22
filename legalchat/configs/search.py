"""
Vector index configuration.

Dependencies: pydantic_settings
System role: Search service endpoint, index name and backend selection
"""

from typing import ClassVar

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from legalchat.configs.base import ServiceSettings


class SearchSettings(ServiceSettings):
    """Settings for the Azure AI Search index (or the in-memory stand-in)."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    required_fields: ClassVar[tuple[str, ...]] = ("endpoint", "api_key", "index_name")

    store_type: str = Field(
        default="azure",
        description="Vector index backend: 'azure' (Azure AI Search) or 'memory' (local dev/tests)",
    )
    endpoint: str = Field(default="", description="Search service URL, e.g. https://<name>.search.windows.net")
    api_key: str = Field(default="", description="Admin key for the search service")
    index_name: str = Field(default="legal-index", description="Target index name")
    api_version: str = Field(default="2023-11-01", description="Search REST API version")
    timeout_seconds: float = Field(default=15.0, description="Per-call timeout for vector queries")
    batch_size: int = Field(default=1000, description="Documents per index upload/delete batch")
    page_size: int = Field(default=1000, description="Ids fetched per page when listing documents")

    def missing_env_vars(self) -> list[str]:
        """Memory backend needs no remote credentials."""
        if self.store_type.lower() == "memory":
            return []
        return super().missing_env_vars()
