"""
Document upload API endpoint.

Routes: POST /upload_blob

Dependencies: legalchat.application.services, legalchat.models
System role: Document upload HTTP API
"""

import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from legalchat.api.deps import get_upload_service
from legalchat.application.services import UploadService
from legalchat.core.exceptions import ExternalServiceError, ValidationError
from legalchat.models.upload import UploadBlobRequest, UploadBlobResponse, UploadErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=UploadErrorResponse(message=message).model_dump())


@router.post(
    "/upload_blob",
    response_model=UploadBlobResponse,
    responses={400: {"model": UploadErrorResponse}, 500: {"model": UploadErrorResponse}},
)
async def upload_blob(
    body: UploadBlobRequest | None = Body(default=None),
    service: UploadService = Depends(get_upload_service),
):
    """
    Store a base64-encoded ``XX.docx`` document and queue its ingestion.

    Args:
        body: filename, file_data (base64), optional container
        service: Injected upload service

    Returns:
        UploadBlobResponse: message and iso_code

    Raises:
        HTTP 400: Missing body, missing fields, bad filename or bad base64
        HTTP 500: Storage failure
    """
    if body is None:
        return JSONResponse(status_code=400, content={"error": "Request body is required"})

    try:
        return await service.upload(body.filename, body.file_data, body.container)
    except ValidationError as e:
        logger.warning(f"{__name__}:upload_blob - {e.message}", extra={"doc_filename": body.filename})
        return _error(400, e.message)
    except ExternalServiceError as e:
        logger.error(f"{__name__}:upload_blob - {e}", extra={"doc_filename": body.filename})
        return _error(500, f"Upload failed: {e.message}")
