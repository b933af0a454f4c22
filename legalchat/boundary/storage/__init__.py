"""Blob storage for uploaded documents and extracted images."""

from .blob_client import BlobStorageClient

__all__ = ["BlobStorageClient"]
