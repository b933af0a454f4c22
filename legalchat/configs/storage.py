"""
Blob storage configuration.

Targets any S3-compatible object store. A container maps to a bucket.

Dependencies: pydantic_settings
System role: Upload container and object store connection settings
"""

from typing import ClassVar

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from legalchat.configs.base import ServiceSettings


class StorageSettings(ServiceSettings):
    """Settings for uploaded documents and extracted images."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    required_fields: ClassVar[tuple[str, ...]] = ("container",)

    container: str = Field(default="legaldocsrag", description="Default upload container (bucket)")
    region: str = Field(default="eu-central-1", description="Object store region")
    endpoint_url: str | None = Field(
        default=None,
        description="Custom endpoint for S3-compatible stores (MinIO, Azurite gateway, ...)",
    )
    access_key_id: str | None = Field(default=None, description="Access key; default chain if unset")
    secret_access_key: str | None = Field(default=None, description="Secret key; default chain if unset")
    image_prefix: str = Field(default="images", description="Key prefix for extracted document images")
    max_pool_connections: int = Field(default=50, description="botocore connection pool size")
