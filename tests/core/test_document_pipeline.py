"""
Test suite for the document ingestion pipeline.

Covers captioning fallbacks, zero-vector embedding degradation,
delete-then-upload index synchronization and end-to-end ingestion against
the in-memory index.

System role: Verification of ingestion orchestration and re-ingestion semantics
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from legalchat.core.document_processing.configs import DocumentPipelineSettings
from legalchat.core.document_processing.entrypoint import DocumentPipeline
from legalchat.core.document_processing.models import Chunk, ImageElement, IngestionEvent
from legalchat.core.document_processing.tasks.captioning_task import CaptioningTask, parse_caption
from legalchat.core.document_processing.tasks.embedding_task import EmbeddingTask
from legalchat.core.document_processing.tasks.index_sync_task import (
    IndexSyncTask,
    build_index_documents,
)
from legalchat.core.exceptions import (
    BlobStorageError,
    ChatCompletionError,
    FilenameValidationError,
    ParsingError,
    VectorStoreError,
)


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    return DocumentPipelineSettings(max_chunk_chars=30, embedding_concurrency=2, enqueue_on_upload=False)


@pytest.fixture
def pipeline(embedding_client, memory_index, pipeline_settings) -> DocumentPipeline:
    return DocumentPipeline(embedding_client, memory_index, settings=pipeline_settings)


def _image() -> ImageElement:
    return ImageElement(data=b"\x89PNG", content_type="image/png", extension="png", image_hash="0a1b2c3d")


class TestCaptioningTask:
    """Test suite for image captioning."""

    def test_parse_caption_should_read_json(self) -> None:
        result = parse_caption('{"caption": "Sign", "image_text": "NO SMOKING", "extra": 1}')

        assert (result.caption, result.image_text) == ("Sign", "NO SMOKING")

    def test_parse_caption_should_keep_raw_text_when_not_json(self) -> None:
        assert parse_caption("  A no-smoking sign  ").caption == "A no-smoking sign"

    def test_parse_caption_should_read_fenced_json(self) -> None:
        """Test a fenced JSON reply yields the caption and OCR text, not the raw fence."""
        result = parse_caption('```json\n{"caption": "A map", "image_text": "ZONE B"}\n```')

        assert result.caption == "A map"
        assert result.image_text == "ZONE B"

    @pytest.mark.asyncio
    async def test_disabled_task_should_leave_images_untouched(self) -> None:
        images = [_image()]

        result = await CaptioningTask(None, None, container="c").run(images, "DE")

        assert result[0].caption is None

    @pytest.mark.asyncio
    async def test_run_should_caption_and_store(self, mock_chat_client) -> None:
        """Test caption, OCR text and storage URL are set on the image."""
        # Arrange
        mock_chat_client.complete.return_value = '{"caption": "Sign", "image_text": "NO SMOKING"}'
        blobs = MagicMock()
        blobs.upload = AsyncMock(return_value="https://store/legaldocsrag/images/DE/image_0a1b2c3d.png")
        task = CaptioningTask(mock_chat_client, blobs, container="legaldocsrag")

        # Act
        [image] = await task.run([_image()], "DE")

        # Assert
        assert image.caption == "Sign"
        assert image.ocr_text == "NO SMOKING"
        assert image.url.endswith("image_0a1b2c3d.png")
        container, key = blobs.upload.await_args.args[:2]
        assert (container, key) == ("legaldocsrag", "images/DE/image_0a1b2c3d.png")
        assert mock_chat_client.complete.await_args.kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_caption_failure_should_use_placeholder(self, mock_chat_client) -> None:
        """Test a failed vision call keeps the image with a placeholder caption."""
        mock_chat_client.complete.side_effect = ChatCompletionError("vision down")

        [image] = await CaptioningTask(mock_chat_client, None, container="c").run([_image()], "DE")

        assert image.caption == "Image: image_0a1b2c3d.png"
        assert image.ocr_text is None

    @pytest.mark.asyncio
    async def test_storage_failure_should_leave_url_empty(self, mock_chat_client) -> None:
        mock_chat_client.complete.return_value = '{"caption": "Sign"}'
        blobs = MagicMock()
        blobs.upload = AsyncMock(side_effect=BlobStorageError("denied", operation="upload"))

        [image] = await CaptioningTask(mock_chat_client, blobs, container="c").run([_image()], "DE")

        assert image.caption == "Sign"
        assert image.url is None


class TestEmbeddingTask:
    """Test suite for per-chunk embedding."""

    @pytest.mark.asyncio
    async def test_embed_should_keep_chunk_order(self, embedding_client, vector_for) -> None:
        chunks = [Chunk(content=f"chunk {i}") for i in range(5)]

        outcome = await EmbeddingTask(embedding_client, concurrency=2).embed(chunks)

        assert outcome.vectors == [vector_for(f"chunk {i}") for i in range(5)]
        assert outcome.degraded_indices == []

    @pytest.mark.asyncio
    async def test_failed_chunk_should_get_zero_vector(
        self, hash_embeddings, embedding_client, fast_retry_policy
    ) -> None:
        """Test one failing chunk does not abort the document."""
        # Arrange
        hash_embeddings.fail_on = {"broken"}
        chunks = [Chunk(content="fine"), Chunk(content="broken chunk"), Chunk(content="also fine")]

        # Act
        outcome = await EmbeddingTask(embedding_client).embed(chunks)

        # Assert
        assert outcome.degraded_indices == [1]
        assert outcome.vectors[1] == [0.0] * embedding_client.dimension
        assert all(any(v) for i, v in enumerate(outcome.vectors) if i != 1)
        assert hash_embeddings.calls.count("broken chunk") == fast_retry_policy.max_attempts


class TestIndexSyncTask:
    """Test suite for delete-then-upload synchronization."""

    def test_documents_should_get_sequential_ids(self) -> None:
        chunks = [Chunk(content="a"), Chunk(content="| t |", chunk_type="table", table_md="| t |")]

        docs = build_index_documents("DE", chunks, [[1.0], [2.0]])

        assert [d.id for d in docs] == ["DE_0", "DE_1"]
        assert docs[1].chunk_type == "table"
        assert docs[1].table_md == "| t |"

    def test_mismatched_vectors_should_raise(self) -> None:
        with pytest.raises(ValueError):
            build_index_documents("DE", [Chunk(content="a")], [])

    @pytest.mark.asyncio
    async def test_sync_should_replace_only_that_jurisdiction(self, memory_index, index_documents_factory) -> None:
        """Test re-sync removes stale entries and leaves other codes alone."""
        # Arrange
        await memory_index.upload(index_documents_factory("DE", 5) + index_documents_factory("CH", 3))
        sync = IndexSyncTask(memory_index)

        # Act
        result = await sync.sync("DE", index_documents_factory("DE", 2))

        # Assert
        assert result.deleted.succeeded == 5
        assert result.uploaded.succeeded == 2
        assert sorted(await memory_index.list_ids("DE")) == ["DE_0", "DE_1"]
        assert await memory_index.count("CH") == 3

    @pytest.mark.asyncio
    async def test_remove_all_should_empty_index(self, memory_index, index_documents_factory) -> None:
        await memory_index.upload(index_documents_factory("DE", 2) + index_documents_factory("CH", 2))

        result = await IndexSyncTask(memory_index).remove(None)

        assert result.succeeded == 4
        assert await memory_index.count() == 0

    @pytest.mark.asyncio
    async def test_upload_failure_should_propagate_after_delete(self) -> None:
        """Test an upload failure after the delete is raised to the caller."""
        index = AsyncMock()
        index.list_ids.return_value = ["DE_0"]
        index.delete.return_value = MagicMock(succeeded=1, failed=0)
        index.upload.side_effect = VectorStoreError("upload failed", operation="upload")

        with pytest.raises(VectorStoreError):
            await IndexSyncTask(index).sync("DE", [])

        index.delete.assert_awaited_once_with(["DE_0"])


class TestDocumentPipeline:
    """Test suite for end-to-end ingestion."""

    @pytest.mark.asyncio
    async def test_process_should_index_document(self, pipeline, memory_index, docx_factory) -> None:
        """Test a document is parsed, chunked, embedded and indexed."""
        # Arrange
        data = docx_factory(
            paragraphs=["Art. 1 Smoking is prohibited.", "Art. 2 Exceptions apply."],
            table_rows=[["Age", "Rule"], ["16", "Allowed"]],
        )

        # Act
        result = await pipeline.process(data, "DE.docx")

        # Assert
        assert result.iso_code == "DE"
        assert result.chunk_count == 3
        assert result.uploaded_count == 3
        assert result.succeeded
        documents = memory_index.documents
        assert sorted(documents) == ["DE_0", "DE_1", "DE_2"]
        assert documents["DE_2"].chunk_type == "table"
        assert all(d.iso_code == "DE" for d in documents.values())

    @pytest.mark.asyncio
    async def test_reingest_should_leave_only_latest_entries(self, pipeline, memory_index, docx_factory) -> None:
        """Test ingesting a shorter version removes entries from the longer one."""
        # Arrange
        long_version = docx_factory(paragraphs=[f"Paragraph number {i} of the act." for i in range(6)])
        short_version = docx_factory(paragraphs=["Only paragraph."])
        first = await pipeline.process(long_version, "CH.docx")

        # Act
        second = await pipeline.process(short_version, "CH.docx")

        # Assert
        assert first.chunk_count == 6
        assert second.deleted_count == 6
        assert list(memory_index.documents) == ["CH_0"]
        assert memory_index.documents["CH_0"].chunk == "Only paragraph."

    @pytest.mark.asyncio
    async def test_same_document_twice_should_be_idempotent(self, pipeline, memory_index, docx_factory) -> None:
        data = docx_factory(paragraphs=["Art. 1", "Art. 2"])

        await pipeline.process(data, "AT.docx")
        snapshot = memory_index.documents
        await pipeline.process(data, "AT.docx")

        assert memory_index.documents == snapshot

    @pytest.mark.asyncio
    async def test_invalid_filename_should_not_touch_index(self, pipeline, memory_index, docx_factory, index_documents_factory) -> None:
        await memory_index.upload(index_documents_factory("DE", 2))

        with pytest.raises(FilenameValidationError):
            await pipeline.process(docx_factory(paragraphs=["x"]), "de.docx")

        assert await memory_index.count("DE") == 2

    @pytest.mark.asyncio
    async def test_corrupt_document_should_not_touch_index(self, pipeline, memory_index, index_documents_factory) -> None:
        """Test parse failure leaves existing entries in place."""
        await memory_index.upload(index_documents_factory("DE", 2))

        with pytest.raises(ParsingError):
            await pipeline.process(b"corrupt", "DE.docx")

        assert await memory_index.count("DE") == 2

    @pytest.mark.asyncio
    async def test_process_event_should_download_by_basename(self, embedding_client, memory_index, docx_factory) -> None:
        """Test blob events are downloaded and indexed under the basename's code."""
        # Arrange
        blobs = MagicMock()
        blobs.download = AsyncMock(return_value=docx_factory(paragraphs=["Text"]))
        pipeline = DocumentPipeline(embedding_client, memory_index, blob_client=blobs)

        # Act
        result = await pipeline.process_event(IngestionEvent(container="legaldocsrag", filename="uploads/FR.docx"))

        # Assert
        blobs.download.assert_awaited_once_with("legaldocsrag", "uploads/FR.docx")
        assert result.iso_code == "FR"
        assert result.filename == "FR.docx"

    @pytest.mark.asyncio
    async def test_process_blob_should_validate_before_download(self, embedding_client, memory_index) -> None:
        blobs = MagicMock()
        blobs.download = AsyncMock()
        pipeline = DocumentPipeline(embedding_client, memory_index, blob_client=blobs)

        with pytest.raises(FilenameValidationError):
            await pipeline.process_blob("legaldocsrag", "images/DE/image_1.png")

        blobs.download.assert_not_awaited()
