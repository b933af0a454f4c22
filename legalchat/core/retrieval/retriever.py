"""
Balanced retriever.

Embeds the question, runs one jurisdiction-filtered vector query with a
widened candidate count, and balances the hits across the requested
jurisdictions.

Dependencies: legalchat.boundary.llm, legalchat.boundary.vdb
System role: Second stage of question answering
"""

import logging

from legalchat.boundary.llm.embedding_client import EmbeddingClient
from legalchat.boundary.vdb.base import VectorIndex
from legalchat.boundary.vdb.vector_schemas import SearchHit
from legalchat.configs.retrieval import RetrievalSettings
from legalchat.core.exceptions import ValidationError
from legalchat.core.retrieval.balancer import balance_results, fetch_sizes

logger = logging.getLogger(__name__)


class BalancedRetriever:
    """Jurisdiction-balanced vector retrieval."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_index: VectorIndex,
        settings: RetrievalSettings | None = None,
    ) -> None:
        """
        Initialize retriever.

        Args:
            embedding_client: Question embedding
            vector_index: Jurisdiction-tagged index
            settings: Fetch sizing and default k
        """
        self._embeddings = embedding_client
        self._index = vector_index
        self._settings = settings or RetrievalSettings()

    async def retrieve(self, question: str, iso_codes: list[str], k: int | None = None) -> list[SearchHit]:
        """
        Retrieve up to k chunks spread over the requested jurisdictions.

        Args:
            question: User question
            iso_codes: Requested codes, non-empty, first-detected order
            k: Target result count (settings default when None)

        Returns:
            list[SearchHit]: Ordered hits; empty when nothing matched

        Raises:
            ValidationError: No jurisdiction codes given
            EmbeddingError: Question embedding failed
            VectorStoreError: Vector query failed
        """
        if not iso_codes:
            raise ValidationError("At least one jurisdiction code is required", field="iso_codes")

        k = k or self._settings.top_k
        fetch, raw_count = fetch_sizes(
            len(iso_codes),
            k,
            per_jurisdiction=self._settings.per_jurisdiction_fetch,
            max_fetch=self._settings.max_fetch,
            min_candidates=self._settings.min_candidates,
        )

        vector = await self._embeddings.embed(question)
        hits = await self._index.search(vector, iso_codes, raw_count)

        logger.info(
            f"{__name__}:retrieve - Vector query complete",
            extra={
                "iso_codes": iso_codes,
                "k": k,
                "fetch_size": fetch,
                "raw_candidates": raw_count,
                "raw_hits": len(hits),
            },
        )

        if len(iso_codes) > 1 and hits:
            balanced = balance_results(hits, iso_codes, k)
            logger.info(
                f"{__name__}:retrieve - Balanced results",
                extra={
                    "returned": len(balanced),
                    "jurisdictions": sorted({hit.iso_code for hit in balanced}),
                },
            )
            return balanced
        return hits[:k]
