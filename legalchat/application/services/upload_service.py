"""
Document upload service.

Validates the jurisdiction filename and base64 payload, stores the document
in its container (created on demand, existing blob overwritten) and queues
an ingestion run.

Dependencies: base64, legalchat.boundary.storage, legalchat.core.document_processing
System role: Orchestration behind POST /api/upload_blob
"""

import base64
import binascii
import logging

from legalchat.boundary.storage.blob_client import BlobStorageClient
from legalchat.core.document_processing.models import IngestionEvent
from legalchat.core.document_processing.worker import IngestionWorker
from legalchat.core.exceptions import ValidationError
from legalchat.core.jurisdiction.codes import jurisdiction_from_filename
from legalchat.models.upload import UploadBlobResponse

logger = logging.getLogger(__name__)

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class UploadService:
    """Store uploaded documents and trigger ingestion."""

    def __init__(
        self,
        blob_client: BlobStorageClient,
        default_container: str = "legaldocsrag",
        worker: IngestionWorker | None = None,
    ) -> None:
        """
        Initialize upload service.

        Args:
            blob_client: Object store client
            default_container: Container used when the request names none
            worker: Ingestion queue; None disables automatic ingestion
        """
        self._blobs = blob_client
        self._default_container = default_container
        self._worker = worker

    async def upload(
        self,
        filename: str | None,
        file_data: str | None,
        container: str | None = None,
    ) -> UploadBlobResponse:
        """
        Validate and store a document.

        Args:
            filename: ``XX.docx``
            file_data: Base64 content
            container: Target container (default when empty)

        Returns:
            UploadBlobResponse: Confirmation with the jurisdiction code

        Raises:
            ValidationError: Missing fields, bad filename or bad base64
            BlobStorageError: Storage failed after retries
        """
        if not filename or not file_data:
            raise ValidationError("Missing filename or file_data")

        iso_code = jurisdiction_from_filename(filename)

        try:
            data = base64.b64decode(file_data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"Invalid base64 file data: {e}", field="file_data") from e

        target = (container or "").strip() or self._default_container
        await self._blobs.ensure_container(target)
        await self._blobs.upload(target, filename, data, DOCX_CONTENT_TYPE)

        logger.info(
            f"{__name__}:upload - Uploaded document",
            extra={"doc_filename": filename, "container": target, "size_bytes": len(data), "iso_code": iso_code},
        )

        if self._worker is not None:
            await self._worker.enqueue(IngestionEvent(container=target, filename=filename))

        return UploadBlobResponse(message=f"File {filename} uploaded successfully", iso_code=iso_code)
