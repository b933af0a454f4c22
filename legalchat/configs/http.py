"""
Outbound HTTP pool and retry configuration.

Dependencies: pydantic_settings
System role: Shared connection pool limits and backoff policy parameters
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HttpSettings(BaseSettings):
    """Limits for the shared httpx connection pool."""

    model_config = SettingsConfigDict(
        env_prefix="HTTP_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    max_connections: int = Field(default=50, description="Total pooled connections")
    max_keepalive_connections: int = Field(default=20, description="Idle connections kept open")
    keepalive_expiry_seconds: float = Field(default=120.0, description="Idle connection lifetime")
    connect_timeout_seconds: float = Field(default=10.0)
    read_timeout_seconds: float = Field(default=100.0)


class RetrySettings(BaseSettings):
    """Backoff parameters applied to every external call."""

    model_config = SettingsConfigDict(
        env_prefix="RETRY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    max_retries: int = Field(default=2, description="Retries after the first attempt")
    base_delay_seconds: float = Field(default=0.4, description="Delay before the first retry")
    multiplier: float = Field(default=2.0, description="Backoff growth factor")
    max_delay_seconds: float = Field(default=5.0, description="Backoff cap")
    jitter_seconds: float = Field(default=0.2, description="Upper bound of random jitter per attempt")
