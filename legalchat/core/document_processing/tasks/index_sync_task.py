"""
Index synchronization task.

Makes a jurisdiction's index entries match its latest document: list every
existing entry for the code, delete them as a batch, then upload the new
documents as a batch. Not atomic; between the delete and the upload the
jurisdiction has no entries, and a failed upload leaves it empty until the
next successful run. Also serves cleanup (one code or everything).

Dependencies: pydantic, legalchat.boundary.vdb
System role: Final stage of document ingestion pipeline
"""

import logging

from pydantic import BaseModel

from legalchat.boundary.vdb.base import VectorIndex
from legalchat.boundary.vdb.vector_schemas import BatchResult, IndexDocument
from legalchat.core.exceptions import VectorStoreError

from ..models import Chunk

logger = logging.getLogger(__name__)


class IndexSyncResult(BaseModel):
    """Counts from one delete-then-upload run."""

    deleted: BatchResult
    uploaded: BatchResult


def build_index_documents(
    iso_code: str,
    chunks: list[Chunk],
    vectors: list[list[float]],
) -> list[IndexDocument]:
    """
    Pair chunks with vectors under deterministic ids.

    Args:
        iso_code: Jurisdiction code
        chunks: Chunks in pipeline order
        vectors: Embeddings aligned with chunks

    Returns:
        list[IndexDocument]: Documents with ids ``<ISO>_<n>``

    Raises:
        ValueError: chunks and vectors differ in length
    """
    if len(chunks) != len(vectors):
        raise ValueError(f"{len(chunks)} chunks but {len(vectors)} vectors")
    return [
        IndexDocument(
            id=f"{iso_code}_{i}",
            iso_code=iso_code,
            chunk=chunk.content,
            chunk_type=chunk.chunk_type,
            table_md=chunk.table_md,
            embedding=vector,
        )
        for i, (chunk, vector) in enumerate(zip(chunks, vectors))
    ]


class IndexSyncTask:
    """Delete-then-upload synchronization and cleanup."""

    def __init__(self, vector_index: VectorIndex) -> None:
        self._index = vector_index

    async def remove(self, iso_code: str | None) -> BatchResult:
        """
        Delete every entry for a jurisdiction, or every entry when None.

        Args:
            iso_code: Jurisdiction code or None for all

        Returns:
            BatchResult: Deleted/failed counts

        Raises:
            VectorStoreError: Listing or deleting failed after retries
        """
        ids = await self._index.list_ids(iso_code)
        if not ids:
            return BatchResult()
        result = await self._index.delete(ids)
        logger.info(
            f"{__name__}:remove - Deleted index entries",
            extra={
                "iso_code": iso_code or "ALL",
                "deleted": result.succeeded,
                "failed": result.failed,
            },
        )
        return result

    async def sync(self, iso_code: str, documents: list[IndexDocument]) -> IndexSyncResult:
        """
        Replace a jurisdiction's entries with new documents.

        Args:
            iso_code: Jurisdiction code
            documents: Fresh documents for that jurisdiction

        Returns:
            IndexSyncResult: Delete and upload counts

        Raises:
            VectorStoreError: Index call failed after retries
        """
        deleted = await self.remove(iso_code)
        try:
            uploaded = await self._index.upload(documents)
        except VectorStoreError:
            logger.error(
                f"{__name__}:sync - Upload failed after delete; jurisdiction has no entries until re-ingested",
                extra={"iso_code": iso_code, "deleted": deleted.succeeded},
            )
            raise

        if uploaded.failed:
            logger.warning(
                f"{__name__}:sync - Some documents were rejected",
                extra={"iso_code": iso_code, "failed": uploaded.failed, "failed_ids": uploaded.failed_ids},
            )
        return IndexSyncResult(deleted=deleted, uploaded=uploaded)
