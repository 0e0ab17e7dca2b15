"""
Blob storage adapters.

Exports: BlobStore, LocalBlobStore, S3BlobStore, get_blob_store
"""

from docqa.configs.storage import StorageSettings

from .base import BlobStore
from .local_store import LocalBlobStore
from .s3_store import S3BlobStore


def get_blob_store(settings: StorageSettings) -> BlobStore:
    """
    Build the blob store selected by configuration.

    Args:
        settings: Storage settings (backend "local" or "s3")

    Returns:
        BlobStore: Configured adapter

    Raises:
        ValueError: Unknown backend
    """
    if settings.backend == "local":
        return LocalBlobStore(settings.local_path)
    if settings.backend == "s3":
        return S3BlobStore(bucket=settings.bucket, region=settings.region)
    raise ValueError(f"Unknown storage backend: {settings.backend}")


__all__ = ["BlobStore", "LocalBlobStore", "S3BlobStore", "get_blob_store"]
