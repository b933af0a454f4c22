"""
Vector index interface.

Dependencies: abc
System role: Contract shared by the Azure AI Search client and the in-memory index
"""

from abc import ABC, abstractmethod

from legalchat.boundary.vdb.vector_schemas import BatchResult, IndexDocument, SearchHit


class VectorIndex(ABC):
    """Jurisdiction-tagged vector index."""

    name: str = "vector-index"

    @abstractmethod
    async def search(self, vector: list[float], iso_codes: list[str], k: int) -> list[SearchHit]:
        """Top-k similarity query restricted to the given jurisdictions, best first."""

    @abstractmethod
    async def list_ids(self, iso_code: str | None = None) -> list[str]:
        """Keys of all documents for a jurisdiction (every document when None)."""

    @abstractmethod
    async def upload(self, documents: list[IndexDocument]) -> BatchResult:
        """Insert or replace documents."""

    @abstractmethod
    async def delete(self, ids: list[str]) -> BatchResult:
        """Delete documents by key."""

    @abstractmethod
    async def count(self, iso_code: str | None = None) -> int:
        """Number of documents for a jurisdiction (every document when None)."""

    async def close(self) -> None:
        """Release resources. Shared clients are closed by their owner."""
