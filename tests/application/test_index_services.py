"""
Test suite for UploadService, CleanupService and DiagnosticService.

System role: Verification of upload, cleanup and diagnostic orchestration
"""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from legalchat.application.services.cleanup_service import CleanupService
from legalchat.application.services.diagnostic_service import DiagnosticService
from legalchat.application.services.upload_service import DOCX_CONTENT_TYPE, UploadService
from legalchat.configs.search import SearchSettings
from legalchat.configs.settings import Settings
from legalchat.core.document_processing.models import IngestionEvent
from legalchat.core.document_processing.tasks import IndexSyncTask
from legalchat.core.exceptions import ConfigurationError, FilenameValidationError, ValidationError

PAYLOAD = base64.b64encode(b"docx bytes").decode("ascii")


@pytest.fixture
def blob_client() -> MagicMock:
    client = MagicMock()
    client.ensure_container = AsyncMock()
    client.upload = AsyncMock(return_value="https://store/legaldocsrag/DE.docx")
    client.container_exists = AsyncMock(return_value=True)
    client.list_blobs = AsyncMock(return_value=["CH.docx", "DE.docx"])
    return client


@pytest.fixture
def worker() -> MagicMock:
    worker = MagicMock(running=True, pending=0, processed=4, failures=1)
    worker.recent = [MagicMock(filename="CH.docx"), MagicMock(filename="DE.docx")]
    worker.enqueue = AsyncMock()
    return worker


class TestUploadService:
    """Test suite for document upload."""

    @pytest.mark.asyncio
    async def test_upload_should_store_and_enqueue(self, blob_client, worker) -> None:
        """Test a valid upload is stored in the default container and queued."""
        # Arrange
        service = UploadService(blob_client, default_container="legaldocsrag", worker=worker)

        # Act
        response = await service.upload("DE.docx", PAYLOAD)

        # Assert
        assert response.message == "File DE.docx uploaded successfully"
        assert response.iso_code == "DE"
        blob_client.ensure_container.assert_awaited_once_with("legaldocsrag")
        blob_client.upload.assert_awaited_once_with("legaldocsrag", "DE.docx", b"docx bytes", DOCX_CONTENT_TYPE)
        worker.enqueue.assert_awaited_once_with(IngestionEvent(container="legaldocsrag", filename="DE.docx"))

    @pytest.mark.asyncio
    async def test_explicit_container_should_be_used(self, blob_client) -> None:
        await UploadService(blob_client).upload("CH.docx", PAYLOAD, container="archive")

        blob_client.ensure_container.assert_awaited_once_with("archive")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("filename,data", [(None, PAYLOAD), ("DE.docx", None), ("", "")])
    async def test_missing_fields_should_raise(self, blob_client, filename, data) -> None:
        with pytest.raises(ValidationError, match="Missing filename or file_data"):
            await UploadService(blob_client).upload(filename, data)

    @pytest.mark.asyncio
    async def test_bad_filename_should_not_store(self, blob_client) -> None:
        """Test filename validation happens before any storage call."""
        with pytest.raises(FilenameValidationError):
            await UploadService(blob_client).upload("germany.docx", PAYLOAD)

        blob_client.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_base64_should_raise(self, blob_client) -> None:
        with pytest.raises(ValidationError, match="Invalid base64 file data"):
            await UploadService(blob_client).upload("DE.docx", "***not base64***")

        blob_client.upload.assert_not_awaited()


class TestCleanupService:
    """Test suite for index cleanup."""

    @pytest.mark.asyncio
    async def test_single_jurisdiction_should_delete_only_that_code(self, memory_index, index_documents_factory) -> None:
        # Arrange
        await memory_index.upload(index_documents_factory("DE", 3) + index_documents_factory("CH", 2))
        service = CleanupService(IndexSyncTask(memory_index))

        # Act
        response = await service.cleanup("de")

        # Assert
        assert response.success is True
        assert response.message == "Cleaned up documents for DE"
        assert (response.deleted_count, response.failed_count, response.iso_code) == (3, 0, "DE")
        assert response.warning is None
        assert await memory_index.count("CH") == 2

    @pytest.mark.asyncio
    async def test_all_should_delete_everything(self, memory_index, index_documents_factory) -> None:
        await memory_index.upload(index_documents_factory("DE", 3) + index_documents_factory("CH", 2))

        response = await CleanupService(IndexSyncTask(memory_index)).cleanup("ALL")

        assert response.message == "Cleaned up all documents"
        assert (response.deleted_count, response.iso_code) == (5, "ALL")
        assert await memory_index.count() == 0

    @pytest.mark.asyncio
    async def test_nothing_to_delete_should_say_so(self, memory_index) -> None:
        response = await CleanupService(IndexSyncTask(memory_index)).cleanup("FR")

        assert response.message == "No documents for FR found to clean up"
        assert response.deleted_count == 0

    @pytest.mark.asyncio
    async def test_partial_failure_should_add_warning(self) -> None:
        """Test rejected deletions are reported, not raised."""
        index = AsyncMock()
        index.list_ids.return_value = ["DE_0", "DE_1"]
        index.delete.return_value = MagicMock(succeeded=1, failed=1)

        response = await CleanupService(IndexSyncTask(index)).cleanup("DE")

        assert (response.deleted_count, response.failed_count) == (1, 1)
        assert response.warning == "Some documents failed to delete"

    @pytest.mark.asyncio
    async def test_invalid_code_should_raise(self, memory_index) -> None:
        with pytest.raises(ValidationError):
            await CleanupService(IndexSyncTask(memory_index)).cleanup("DEU")


class TestDiagnosticService:
    """Test suite for the diagnostic report."""

    @pytest.mark.asyncio
    async def test_report_should_cover_every_dependency(
        self, blob_client, memory_index, index_documents_factory, embedding_client, worker
    ) -> None:
        """Test a healthy setup reports ok for every section."""
        # Arrange
        await memory_index.upload(index_documents_factory("CH", 2) + index_documents_factory("DE", 1))
        settings = Settings(search=SearchSettings(store_type="memory"))
        service = DiagnosticService(
            settings,
            blob_client_factory=lambda: blob_client,
            vector_index_factory=lambda: memory_index,
            embedding_client_factory=lambda: embedding_client,
            worker_factory=lambda: worker,
        )

        # Act
        report = await service.run()

        # Assert
        assert report.storage.status == "ok"
        assert report.storage.recent_blobs == ["CH.docx", "DE.docx"]
        assert report.search.status == "ok"
        assert report.search.document_count == 3
        assert report.search.per_iso_counts["CH"] == 2
        assert report.openai.status == "ok"
        assert report.openai.embedding_dimension == embedding_client.dimension
        assert report.runtime.ingestion_worker_running is True
        assert report.runtime.ingestions_processed == 4
        assert report.runtime.ingestions_failed == 1
        assert report.runtime.recent_ingestions == ["CH.docx", "DE.docx"]

    @pytest.mark.asyncio
    async def test_failing_sections_should_be_reported_not_raised(self) -> None:
        """Test configuration errors surface inside the report."""
        # Arrange
        def missing():
            raise ConfigurationError("Missing required environment variable(s): OPENAI_ENDPOINT")

        service = DiagnosticService(
            Settings(),
            blob_client_factory=missing,
            vector_index_factory=missing,
            embedding_client_factory=missing,
        )

        # Act
        report = await service.run()

        # Assert
        assert report.storage.status == "error"
        assert report.search.status == "error"
        assert report.openai.status == "error"
        assert "OPENAI_ENDPOINT" in report.openai.error
        assert report.runtime.ingestion_worker_running is False
