"""
Application-wide exception handlers.

Maps domain exceptions that escape routers (typically raised while
resolving dependencies) to HTTP responses.

Dependencies: fastapi, legalchat.core.exceptions
System role: Error taxonomy -> HTTP status mapping
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from legalchat.core.exceptions import ConfigurationError, ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> PlainTextResponse:
    logger.error(
        f"{__name__}:configuration_error_handler - {exc.message}",
        extra={"path": request.url.path, **exc.details},
    )
    return PlainTextResponse(f"Configuration error: {exc.message}", status_code=500)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.message})


async def external_service_error_handler(request: Request, exc: ExternalServiceError) -> JSONResponse:
    logger.error(
        f"{__name__}:external_service_error_handler - {exc}",
        extra={"path": request.url.path},
    )
    return JSONResponse(status_code=500, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach domain exception handlers to the app."""
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ExternalServiceError, external_service_error_handler)
