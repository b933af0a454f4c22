"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_ask_service,
    get_ask_service_factory,
    get_cleanup_service,
    get_diagnostic_service,
    get_service_cache,
    get_upload_service,
)

__all__ = [
    "ServiceCache",
    "get_ask_service",
    "get_ask_service_factory",
    "get_cleanup_service",
    "get_diagnostic_service",
    "get_service_cache",
    "get_upload_service",
]
