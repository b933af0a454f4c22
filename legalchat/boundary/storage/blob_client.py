"""
Blob storage client.

Stores uploaded documents and extracted images in an S3-compatible object
store (container = bucket). boto3 is blocking, so every call is moved to a
worker thread and wrapped in the shared RetryPolicy.

Dependencies: boto3, botocore, legalchat.boundary.http
System role: Document source for ingestion, image sink for captioning
"""

import asyncio
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from legalchat.boundary.http.retry_policy import RetryPolicy, is_retryable
from legalchat.configs.storage import StorageSettings
from legalchat.core.exceptions import BlobStorageError

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"404", "NoSuchBucket", "NoSuchKey", "NotFound"}


class BlobStorageClient:
    """Async facade over a boto3 S3 client."""

    def __init__(
        self,
        retry_policy: RetryPolicy,
        region: str = "eu-central-1",
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        max_pool_connections: int = 50,
        s3_client: Any | None = None,
    ) -> None:
        """
        Initialize blob storage client.

        Args:
            retry_policy: Backoff policy for each call
            region: Object store region
            endpoint_url: Custom endpoint for S3-compatible stores
            access_key_id: Optional access key (default credential chain otherwise)
            secret_access_key: Optional secret key
            max_pool_connections: botocore connection pool size
            s3_client: Pre-built client (tests)
        """
        self._retry = retry_policy
        self._region = region
        self._endpoint_url = endpoint_url
        self._s3_client = s3_client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            config=Config(
                max_pool_connections=max_pool_connections,
                retries={"max_attempts": 1, "mode": "standard"},
            ),
        )

    @classmethod
    def from_settings(cls, settings: StorageSettings, retry_policy: RetryPolicy) -> "BlobStorageClient":
        """Build client from STORAGE_* settings."""
        return cls(
            retry_policy=retry_policy,
            region=settings.region,
            endpoint_url=settings.endpoint_url,
            access_key_id=settings.access_key_id,
            secret_access_key=settings.secret_access_key,
            max_pool_connections=settings.max_pool_connections,
        )

    async def _run(self, operation: str, fn, **kwargs: Any) -> Any:
        try:
            return await self._retry.call(
                asyncio.to_thread, fn, operation=f"storage.{operation}", **kwargs
            )
        except Exception as e:
            if not is_retryable(e):
                raise
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise BlobStorageError(f"Blob storage {operation} failed: {e}", operation=operation) from e

    def object_url(self, container: str, key: str) -> str:
        """
        Public URL of a stored object.

        Args:
            container: Bucket name
            key: Object key

        Returns:
            str: Path-style URL on the custom endpoint, or virtual-hosted S3 URL
        """
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{container}/{key}"
        return f"https://{container}.s3.{self._region}.amazonaws.com/{key}"

    def _container_exists(self, container: str) -> bool:
        try:
            self._s3_client.head_bucket(Bucket=container)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in NOT_FOUND_CODES:
                return False
            raise

    def _ensure_container(self, container: str) -> bool:
        if self._container_exists(container):
            return False
        params: dict[str, Any] = {"Bucket": container}
        if self._region != "us-east-1" and not self._endpoint_url:
            params["CreateBucketConfiguration"] = {"LocationConstraint": self._region}
        self._s3_client.create_bucket(**params)
        return True

    async def container_exists(self, container: str) -> bool:
        """Whether the container (bucket) exists."""
        return await self._run("head_container", self._container_exists, container=container)

    async def ensure_container(self, container: str) -> None:
        """
        Create the container if it does not exist.

        Args:
            container: Bucket name
        """
        created = await self._run("create_container", self._ensure_container, container=container)
        if created:
            logger.info(f"{__name__}:ensure_container - Created container", extra={"container": container})

    async def upload(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload (overwrite) an object.

        Args:
            container: Bucket name
            key: Object key
            data: Object bytes
            content_type: MIME type

        Returns:
            str: Object URL
        """
        await self._run(
            "upload",
            self._s3_client.put_object,
            Bucket=container,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        return self.object_url(container, key)

    async def download(self, container: str, key: str) -> bytes:
        """
        Download an object.

        Args:
            container: Bucket name
            key: Object key

        Returns:
            bytes: Object content
        """
        response = await self._run("download", self._s3_client.get_object, Bucket=container, Key=key)
        return await asyncio.to_thread(response["Body"].read)

    async def list_blobs(self, container: str, limit: int = 10) -> list[str]:
        """
        List object keys.

        Args:
            container: Bucket name
            limit: Maximum keys returned

        Returns:
            list[str]: Object keys
        """
        response = await self._run(
            "list", self._s3_client.list_objects_v2, Bucket=container, MaxKeys=limit
        )
        return [item["Key"] for item in response.get("Contents", [])]
