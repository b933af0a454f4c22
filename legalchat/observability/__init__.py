"""
Observability module.

Logging setup plus correlation ID propagation for request logs.
"""

from legalchat.observability.correlation import get_correlation_id, set_correlation_id
from legalchat.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
