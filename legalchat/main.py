"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures
lifespan (logging, ingestion worker start/stop, shared client shutdown).

Dependencies: fastapi, uvicorn, legalchat.api, legalchat.observability, legalchat.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legalchat import __version__
from legalchat.api.deps import get_service_cache
from legalchat.api.errors import register_exception_handlers
from legalchat.api.routers import ask_router, cleanup_router, diagnostic_router, upload_router
from legalchat.core.document_processing.configs import get_pipeline_settings
from legalchat.core.exceptions import ConfigurationError
from legalchat.observability.logger import configure_logging
from legalchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Starts the ingestion worker when uploads should trigger ingestion. A
    missing setting does not stop startup: the affected endpoints report it
    on first use and /api/diagnostic lists it.
    """
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)
    logger.info("Application startup: logging configured")

    if get_pipeline_settings().enqueue_on_upload:
        try:
            cache.ingestion_worker.start()
        except ConfigurationError as e:
            logger.warning(
                "Ingestion worker not started: configuration incomplete",
                extra={"error": e.message, **e.details},
            )

    yield

    await cache.aclose()
    logger.info("Application shutdown: shared clients closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Legalchat API",
        description="Jurisdiction-aware legal question answering over indexed legislation",
        version=__version__,
        lifespan=lifespan,
    )

    # Add observability middleware (added last = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(ask_router, prefix="/api")
    app.include_router(upload_router, prefix="/api")
    app.include_router(cleanup_router, prefix="/api")
    app.include_router(diagnostic_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "legalchat.main:app",
        host="0.0.0.0",
        port=8000,
    )
