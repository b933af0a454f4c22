"""
In-memory vector index.

Cosine-similarity index held in a dict. Used for local development
(SEARCH_STORE_TYPE=memory) and tests; state is lost on restart.

Dependencies: math (stdlib)
System role: Development stand-in for the Azure AI Search index
"""

import math

from legalchat.boundary.vdb.base import VectorIndex
from legalchat.boundary.vdb.vector_schemas import BatchResult, IndexDocument, SearchHit


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity; 0.0 when either vector is all zeros."""
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0.0:
        return 0.0
    return dot / norm


class InMemoryVectorIndex(VectorIndex):
    """Dict-backed vector index with exact cosine search."""

    def __init__(self, name: str = "memory") -> None:
        self.name = name
        self._documents: dict[str, IndexDocument] = {}

    @property
    def documents(self) -> dict[str, IndexDocument]:
        """Current documents keyed by id."""
        return dict(self._documents)

    async def search(self, vector: list[float], iso_codes: list[str], k: int) -> list[SearchHit]:
        allowed = set(iso_codes)
        candidates = [doc for doc in self._documents.values() if doc.iso_code in allowed]
        # Stable sort keeps insertion order for equal scores
        ranked = sorted(
            candidates,
            key=lambda doc: cosine_similarity(vector, doc.embedding),
            reverse=True,
        )
        return [SearchHit(id=doc.id, iso_code=doc.iso_code, chunk=doc.chunk) for doc in ranked[:k]]

    async def list_ids(self, iso_code: str | None = None) -> list[str]:
        return [
            doc_id
            for doc_id, doc in self._documents.items()
            if iso_code is None or doc.iso_code == iso_code
        ]

    async def upload(self, documents: list[IndexDocument]) -> BatchResult:
        for doc in documents:
            self._documents[doc.id] = doc
        return BatchResult(succeeded=len(documents))

    async def delete(self, ids: list[str]) -> BatchResult:
        result = BatchResult()
        for doc_id in ids:
            if self._documents.pop(doc_id, None) is None:
                result.failed += 1
                result.failed_ids.append(doc_id)
            else:
                result.succeeded += 1
        return result

    async def count(self, iso_code: str | None = None) -> int:
        return len(await self.list_ids(iso_code))
