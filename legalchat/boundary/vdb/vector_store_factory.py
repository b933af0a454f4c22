"""
Vector index factory for selecting between the in-memory index (dev) and
Azure AI Search (prod).

Depends on SEARCH_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: legalchat.boundary.vdb, legalchat.configs
System role: Vector index instantiation and selection
"""

import logging

import httpx

from legalchat.boundary.http.retry_policy import RetryPolicy
from legalchat.boundary.vdb.azure_search_index import AzureSearchIndex
from legalchat.boundary.vdb.base import VectorIndex
from legalchat.boundary.vdb.memory_index import InMemoryVectorIndex
from legalchat.configs.search import SearchSettings
from legalchat.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_vector_index(
    settings: SearchSettings,
    http_client: httpx.AsyncClient,
    retry_policy: RetryPolicy,
) -> VectorIndex:
    """
    Factory function to get vector index based on configuration.

    Args:
        settings: SEARCH_* settings
        http_client: Shared pooled client
        retry_policy: Backoff policy

    Returns:
        VectorIndex: AzureSearchIndex or InMemoryVectorIndex

    Raises:
        ConfigurationError: If SEARCH_STORE_TYPE is invalid or required settings are missing
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_index - Creating in-memory index (local dev mode)")
        return InMemoryVectorIndex(name=settings.index_name)

    if store_type == "azure":
        missing = settings.missing_env_vars()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}",
                missing=missing,
            )
        logger.info(
            f"{__name__}:get_vector_index - Creating Azure AI Search index client",
            extra={"index": settings.index_name},
        )
        return AzureSearchIndex(
            http_client=http_client,
            endpoint=settings.endpoint,
            api_key=settings.api_key,
            index_name=settings.index_name,
            retry_policy=retry_policy,
            api_version=settings.api_version,
            search_timeout=settings.timeout_seconds,
            batch_size=settings.batch_size,
            page_size=settings.page_size,
        )

    raise ConfigurationError(
        f"Invalid SEARCH_STORE_TYPE: {store_type}. Must be 'memory' (dev) or 'azure' (production)."
    )
