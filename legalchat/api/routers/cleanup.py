"""
Index cleanup API endpoint.

Routes: POST /cleanup_index

Dependencies: legalchat.application.services, legalchat.models
System role: Index maintenance HTTP API
"""

import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from legalchat.api.deps import get_cleanup_service
from legalchat.application.services import CleanupService
from legalchat.core.exceptions import ExternalServiceError, ValidationError
from legalchat.models.cleanup import CleanupRequest, CleanupResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["index"])


@router.post("/cleanup_index", response_model=CleanupResponse, response_model_exclude_none=True)
async def cleanup_index(
    body: CleanupRequest | None = Body(default=None),
    service: CleanupService = Depends(get_cleanup_service),
):
    """
    Delete index entries for one jurisdiction or for all of them.

    Args:
        body: ``{"iso_code": "DE"}`` or ``{"iso_code": "ALL"}``
        service: Injected cleanup service

    Returns:
        CleanupResponse: success, message, deleted/failed counts, warning on partial failure

    Raises:
        HTTP 400: Missing or malformed iso_code
        HTTP 500: Index failure
    """
    iso_code = body.iso_code if body else None
    try:
        return await service.cleanup(iso_code)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except ExternalServiceError as e:
        logger.error(f"{__name__}:cleanup_index - {e}")
        failed = CleanupResponse(
            success=False,
            message=f"Error during index cleanup: {e.message}",
            iso_code=(iso_code or "").strip().upper(),
        )
        return JSONResponse(status_code=500, content=failed.model_dump(exclude_none=True))
