"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embeddings, fast retry policy, in-memory index,
mocked chat clients, .docx builders
Dependencies: pytest, python-docx, langchain_core
System role: Test infrastructure and fixture management
"""

import base64
import hashlib
import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from docx import Document
from langchain_core.embeddings import Embeddings

from legalchat.boundary.http.retry_policy import RetryPolicy
from legalchat.boundary.llm.embedding_client import EmbeddingClient
from legalchat.boundary.vdb.memory_index import InMemoryVectorIndex
from legalchat.boundary.vdb.vector_schemas import IndexDocument

EMBEDDING_DIMENSION = 8

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def hash_vector(text: str, dimension: int = EMBEDDING_DIMENSION) -> list[float]:
    """Deterministic non-zero vector derived from text."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [(byte + 1) / 256.0 for byte in digest[:dimension]]


class HashEmbeddings(Embeddings):
    """Embeddings model returning hash-derived vectors."""

    def __init__(self, dimension: int = EMBEDDING_DIMENSION, fail_on: set[str] | None = None):
        self.dimension = dimension
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        if any(marker in text for marker in self.fail_on):
            raise ConnectionError("embedding endpoint unreachable")
        return hash_vector(text, self.dimension)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


@pytest.fixture
def fast_retry_policy() -> RetryPolicy:
    """Retry policy with the production attempt budget and no sleeping."""
    return RetryPolicy(max_retries=2, base_delay=0.0, multiplier=2.0, max_delay=0.0, jitter=0.0)


@pytest.fixture
def hash_embeddings() -> HashEmbeddings:
    return HashEmbeddings()


@pytest.fixture
def embedding_client(hash_embeddings, fast_retry_policy) -> EmbeddingClient:
    return EmbeddingClient(hash_embeddings, fast_retry_policy, dimension=EMBEDDING_DIMENSION)


@pytest.fixture
def memory_index() -> InMemoryVectorIndex:
    return InMemoryVectorIndex(name="test-index")


@pytest.fixture
def mock_chat_client() -> MagicMock:
    """
    Create mock ChatClient.

    Returns:
        MagicMock: ChatClient whose complete() is an AsyncMock
    """
    client = MagicMock()
    client.complete = AsyncMock(return_value="")
    return client


def make_index_documents(iso_code: str, count: int, start: int = 0) -> list[IndexDocument]:
    """Build index documents with hash vectors for one jurisdiction."""
    return [
        IndexDocument(
            id=f"{iso_code}_{i}",
            iso_code=iso_code,
            chunk=f"{iso_code} section {i}",
            embedding=hash_vector(f"{iso_code} section {i}"),
        )
        for i in range(start, start + count)
    ]


def build_docx(
    paragraphs: list[str] | None = None,
    table_rows: list[list[str]] | None = None,
    trailing_paragraphs: list[str] | None = None,
    with_image: bool = False,
) -> bytes:
    """
    Build a .docx in memory.

    Args:
        paragraphs: Paragraphs before the table
        table_rows: Rows of the table (first row is the header)
        trailing_paragraphs: Paragraphs after the table
        with_image: Embed a 1x1 PNG

    Returns:
        bytes: Document content
    """
    document = Document()
    for text in paragraphs or []:
        document.add_paragraph(text)
    if table_rows:
        columns = max(len(row) for row in table_rows)
        table = document.add_table(rows=len(table_rows), cols=columns)
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    for text in trailing_paragraphs or []:
        document.add_paragraph(text)
    if with_image:
        document.add_picture(io.BytesIO(PNG_BYTES))
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_factory():
    """Provide the in-memory .docx builder."""
    return build_docx


@pytest.fixture
def index_documents_factory():
    """Provide the per-jurisdiction index document builder."""
    return make_index_documents


@pytest.fixture
def vector_for():
    """Provide the hash vector function used by HashEmbeddings."""
    return hash_vector
