"""
Embedding generation task.

One embedding call per chunk, run concurrently under a semaphore. A chunk
whose embedding still fails after retries gets a zero vector so the rest
of the document is indexed.

Dependencies: asyncio, legalchat.boundary.llm
System role: Third stage of document ingestion pipeline
"""

import asyncio
import logging

from pydantic import BaseModel, Field

from legalchat.boundary.llm.embedding_client import EmbeddingClient
from legalchat.core.exceptions import EmbeddingError

from ..models import Chunk

logger = logging.getLogger(__name__)


class EmbeddingOutcome(BaseModel):
    """Vectors aligned with the input chunks."""

    vectors: list[list[float]] = Field(default_factory=list)
    degraded_indices: list[int] = Field(default_factory=list, description="Chunks given a zero vector")


class EmbeddingTask:
    """Generate one embedding per chunk."""

    def __init__(self, embedding_client: EmbeddingClient, concurrency: int = 4) -> None:
        """
        Initialize embedding task.

        Args:
            embedding_client: Client with retry policy
            concurrency: Maximum in-flight embedding calls
        """
        self._client = embedding_client
        self._concurrency = max(1, concurrency)

    async def embed(self, chunks: list[Chunk]) -> EmbeddingOutcome:
        """
        Embed chunks.

        Args:
            chunks: Chunks to embed

        Returns:
            EmbeddingOutcome: Vectors in chunk order plus degraded positions
        """
        semaphore = asyncio.Semaphore(self._concurrency)
        degraded: list[int] = []

        async def embed_one(index: int, chunk: Chunk) -> list[float]:
            async with semaphore:
                try:
                    return await self._client.embed(chunk.content)
                except EmbeddingError as e:
                    logger.warning(
                        f"{__name__}:embed - Using zero vector for chunk",
                        extra={"chunk_index": index, "chunk_type": chunk.chunk_type, "error": str(e)},
                    )
                    degraded.append(index)
                    return self._client.zero_vector()

        vectors = await asyncio.gather(*(embed_one(i, chunk) for i, chunk in enumerate(chunks)))
        return EmbeddingOutcome(vectors=list(vectors), degraded_indices=sorted(degraded))
