"""
Embedding client.

Wraps a single external call (text -> fixed-length vector) with the shared
retry policy.

Dependencies: langchain_core, legalchat.boundary.http
System role: Vectors for questions (retrieval) and chunks (ingestion)
"""

import logging

from langchain_core.embeddings import Embeddings

from legalchat.boundary.http.retry_policy import RetryPolicy, is_retryable
from legalchat.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Generate embeddings with retry and dimension checking."""

    def __init__(self, embeddings: Embeddings, retry_policy: RetryPolicy, dimension: int) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: LangChain embeddings model
            retry_policy: Backoff policy for each call
            dimension: Expected vector length
        """
        self._embeddings = embeddings
        self._retry = retry_policy
        self.dimension = dimension

    async def embed(self, text: str) -> list[float]:
        """
        Embed one text.

        Args:
            text: Input text

        Returns:
            list[float]: Vector of length ``dimension``

        Raises:
            EmbeddingError: Call failed after all retries or returned a wrong-sized vector
        """
        try:
            vector = await self._retry.call(self._embeddings.aembed_query, text, operation="embed")
        except Exception as e:
            if not is_retryable(e):
                raise
            logger.error(f"{__name__}:embed - {type(e).__name__}: {e}")
            raise EmbeddingError(f"Failed to generate embedding: {e}") from e

        if len(vector) != self.dimension:
            raise EmbeddingError(
                f"Embedding has {len(vector)} dimensions, expected {self.dimension}",
                details={"received": len(vector), "expected": self.dimension},
            )
        return list(vector)

    def zero_vector(self) -> list[float]:
        """Placeholder vector for chunks whose embedding failed."""
        return [0.0] * self.dimension
