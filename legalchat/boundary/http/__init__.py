"""Shared outbound HTTP pool and retry policy."""

from .client import build_http_client
from .retry_policy import RetryPolicy, is_retryable

__all__ = ["RetryPolicy", "build_http_client", "is_retryable"]
