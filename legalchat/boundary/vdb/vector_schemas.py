"""
Vector index schemas.

Pydantic models for index documents, search hits and batch outcomes.
Used for type-safe vector index interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChunkType = Literal["text", "table", "image"]


class IndexDocument(BaseModel):
    """
    Persisted index entry.

    The id is ``<ISO>_<sequence>`` so re-ingesting a jurisdiction rewrites
    the same keys and the delete-then-upload sync leaves no leftovers.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Deterministic key: jurisdiction code + sequence number")
    iso_code: str = Field(description="Two-letter jurisdiction code")
    chunk: str = Field(description="Chunk text content")
    chunk_type: ChunkType = Field(default="text", description="text | table | image")
    table_md: str | None = Field(default=None, description="Markdown rendering for table chunks")
    embedding: list[float] = Field(description="Embedding vector")


class SearchHit(BaseModel):
    """Single result from a filtered vector query."""

    model_config = ConfigDict(frozen=True)

    id: str
    iso_code: str
    chunk: str


class BatchResult(BaseModel):
    """Outcome of an index upload or delete batch."""

    succeeded: int = Field(default=0, description="Documents accepted by the index")
    failed: int = Field(default=0, description="Documents rejected by the index")
    failed_ids: list[str] = Field(default_factory=list, description="Keys of rejected documents")
