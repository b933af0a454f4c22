"""
Shared httpx connection pool.

One AsyncClient per process is created by the service container and passed
to every component that talks HTTP (search index, model clients). Tests
substitute a client built on ``httpx.MockTransport``.

Dependencies: httpx, legalchat.configs
System role: Size-bounded connection pool reused across requests
"""

import httpx

from legalchat.configs.http import HttpSettings


def build_http_client(
    settings: HttpSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create the pooled async HTTP client.

    Args:
        settings: Pool limits and timeouts (defaults when None)
        transport: Optional transport override (tests)

    Returns:
        httpx.AsyncClient: Client with bounded pool and idle expiry
    """
    settings = settings or HttpSettings()
    limits = httpx.Limits(
        max_connections=settings.max_connections,
        max_keepalive_connections=settings.max_keepalive_connections,
        keepalive_expiry=settings.keepalive_expiry_seconds,
    )
    timeout = httpx.Timeout(
        settings.read_timeout_seconds,
        connect=settings.connect_timeout_seconds,
    )
    return httpx.AsyncClient(limits=limits, timeout=timeout, transport=transport)
