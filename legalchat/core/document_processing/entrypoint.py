"""
Document pipeline orchestrator.

Coordinates filename validation, parsing, captioning, chunking, embedding
and index synchronization for one document / one jurisdiction.

Failure semantics: anything before the sync step (bad filename, corrupt
document, download failure) leaves the index untouched. A failure between
delete and upload leaves the jurisdiction empty until a later run succeeds.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
from pathlib import PurePosixPath

from legalchat.boundary.llm.chat_client import ChatClient
from legalchat.boundary.llm.embedding_client import EmbeddingClient
from legalchat.boundary.storage.blob_client import BlobStorageClient
from legalchat.boundary.vdb.base import VectorIndex
from legalchat.core.jurisdiction.codes import jurisdiction_from_filename

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .models import IngestionEvent, PipelineResult
from .tasks import (
    CaptioningTask,
    ChunkingTask,
    EmbeddingTask,
    IndexSyncTask,
    ParsingTask,
    build_index_documents,
)

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: parse -> caption -> chunk -> embed -> sync."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_index: VectorIndex,
        blob_client: BlobStorageClient | None = None,
        caption_client: ChatClient | None = None,
        image_container: str = "legaldocsrag",
        image_prefix: str = "images",
        settings: DocumentPipelineSettings | None = None,
    ) -> None:
        """
        Initialize pipeline with collaborators and configuration.

        Args:
            embedding_client: Per-chunk embeddings
            vector_index: Target index
            blob_client: Source documents and image sink
            caption_client: Vision chat client; None disables captioning
            image_container: Container receiving extracted images
            image_prefix: Key prefix for extracted images
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._blobs = blob_client

        self._parsing_task = ParsingTask()
        self._captioning_task = CaptioningTask(
            chat_client=caption_client,
            blob_client=blob_client,
            container=image_container,
            image_prefix=image_prefix,
        )
        self._chunking_task = ChunkingTask(max_chars=self._settings.max_chunk_chars)
        self._embedding_task = EmbeddingTask(
            embedding_client,
            concurrency=self._settings.embedding_concurrency,
        )
        self._index_sync_task = IndexSyncTask(vector_index)

    @property
    def index_sync(self) -> IndexSyncTask:
        """Sync task, shared with cleanup."""
        return self._index_sync_task

    async def process(self, data: bytes, filename: str) -> PipelineResult:
        """
        Process document through full pipeline.

        Args:
            data: Raw document bytes
            filename: Document name carrying the jurisdiction code (``XX.docx``)

        Returns:
            PipelineResult: Counts and timing

        Raises:
            FilenameValidationError: Name does not carry a jurisdiction code
            ParsingError: Document parsing failed
            VectorStoreError: Index synchronization failed
        """
        start_time = time.perf_counter()
        iso_code = jurisdiction_from_filename(filename)

        logger.info(
            f"{__name__}:process - Starting ingestion",
            extra={"iso_code": iso_code, "doc_filename": filename, "size_bytes": len(data)},
        )

        parsed = await asyncio.to_thread(self._parsing_task.parse, data, filename)
        parsed.images = await self._captioning_task.run(parsed.images, iso_code)
        chunks = self._chunking_task.chunk(parsed)
        embedded = await self._embedding_task.embed(chunks)
        documents = build_index_documents(iso_code, chunks, embedded.vectors)
        sync = await self._index_sync_task.sync(iso_code, documents)

        result = PipelineResult(
            iso_code=iso_code,
            filename=filename,
            chunk_count=len(chunks),
            image_count=len(parsed.images),
            degraded_embeddings=len(embedded.degraded_indices),
            deleted_count=sync.deleted.succeeded,
            delete_failed_count=sync.deleted.failed,
            uploaded_count=sync.uploaded.succeeded,
            upload_failed_count=sync.uploaded.failed,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        logger.info(
            f"{__name__}:process - Ingestion complete",
            extra=result.model_dump(exclude={"filename"}),
        )
        return result

    async def process_blob(self, container: str, key: str) -> PipelineResult:
        """
        Download a stored document and process it.

        The filename is validated before downloading.

        Args:
            container: Container (bucket) name
            key: Object key; its basename must be ``XX.docx``

        Returns:
            PipelineResult: Counts and timing

        Raises:
            FilenameValidationError: Basename does not carry a jurisdiction code
            BlobStorageError: Download failed after retries
            ValueError: No blob client configured
        """
        filename = PurePosixPath(key).name
        jurisdiction_from_filename(filename)
        if self._blobs is None:
            raise ValueError("Blob storage is not configured for this pipeline")
        data = await self._blobs.download(container, key)
        return await self.process(data, filename)

    async def process_event(self, event: IngestionEvent) -> PipelineResult:
        """Process an ingestion event (container + filename)."""
        return await self.process_blob(event.container, event.filename)
