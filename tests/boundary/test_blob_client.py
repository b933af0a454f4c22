"""
Test suite for BlobStorageClient.

boto3 is replaced by a MagicMock S3 client.

System role: Verification of the object store boundary
"""

import io
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from legalchat.boundary.storage.blob_client import BlobStorageClient
from legalchat.core.exceptions import BlobStorageError


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "HeadBucket")


@pytest.fixture
def s3() -> MagicMock:
    return MagicMock()


@pytest.fixture
def blob_client(s3, fast_retry_policy) -> BlobStorageClient:
    return BlobStorageClient(fast_retry_policy, region="eu-central-1", s3_client=s3)


class TestBlobStorageClient:
    """Test suite for object store operations."""

    @pytest.mark.asyncio
    async def test_upload_should_put_object_and_return_url(self, blob_client, s3) -> None:
        """Test objects are written with content type and addressed by URL."""
        url = await blob_client.upload("legaldocsrag", "DE.docx", b"data", "application/x-test")

        s3.put_object.assert_called_once_with(
            Bucket="legaldocsrag", Key="DE.docx", Body=b"data", ContentType="application/x-test"
        )
        assert url == "https://legaldocsrag.s3.eu-central-1.amazonaws.com/DE.docx"

    def test_custom_endpoint_should_use_path_style_url(self, s3, fast_retry_policy) -> None:
        client = BlobStorageClient(fast_retry_policy, endpoint_url="http://localhost:9000/", s3_client=s3)

        assert client.object_url("bucket", "images/DE/a.png") == "http://localhost:9000/bucket/images/DE/a.png"

    @pytest.mark.asyncio
    async def test_download_should_read_body(self, blob_client, s3) -> None:
        s3.get_object.return_value = {"Body": io.BytesIO(b"docx bytes")}

        assert await blob_client.download("legaldocsrag", "DE.docx") == b"docx bytes"

    @pytest.mark.asyncio
    async def test_ensure_container_should_create_missing_bucket(self, blob_client, s3) -> None:
        """Test a missing bucket is created with the region constraint."""
        s3.head_bucket.side_effect = _client_error("404")

        await blob_client.ensure_container("legaldocsrag")

        s3.create_bucket.assert_called_once_with(
            Bucket="legaldocsrag",
            CreateBucketConfiguration={"LocationConstraint": "eu-central-1"},
        )

    @pytest.mark.asyncio
    async def test_ensure_container_should_skip_existing_bucket(self, blob_client, s3) -> None:
        await blob_client.ensure_container("legaldocsrag")

        s3.create_bucket.assert_not_called()

    @pytest.mark.asyncio
    async def test_container_exists_should_report_missing(self, blob_client, s3) -> None:
        s3.head_bucket.side_effect = _client_error("NoSuchBucket")

        assert await blob_client.container_exists("legaldocsrag") is False

    @pytest.mark.asyncio
    async def test_list_blobs_should_return_keys(self, blob_client, s3) -> None:
        s3.list_objects_v2.return_value = {"Contents": [{"Key": "CH.docx"}, {"Key": "DE.docx"}]}

        keys = await blob_client.list_blobs("legaldocsrag", limit=5)

        assert keys == ["CH.docx", "DE.docx"]
        s3.list_objects_v2.assert_called_once_with(Bucket="legaldocsrag", MaxKeys=5)

    @pytest.mark.asyncio
    async def test_persistent_failure_should_raise_blob_storage_error(self, blob_client, s3, fast_retry_policy) -> None:
        """Test failures are retried, then mapped to BlobStorageError."""
        s3.put_object.side_effect = _client_error("AccessDenied")

        with pytest.raises(BlobStorageError) as exc_info:
            await blob_client.upload("legaldocsrag", "DE.docx", b"x")

        assert exc_info.value.details["operation"] == "upload"
        assert s3.put_object.call_count == fast_retry_policy.max_attempts
