"""
S3 blob store.

Stores document payloads in an S3 bucket. boto3 calls are blocking and
run in the threadpool.

Dependencies: boto3
System role: BlobStore adapter for deployed environments
"""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from docqa.core.exceptions import StorageError

from .base import BlobStore

logger = logging.getLogger(__name__)


class S3BlobStore(BlobStore):
    """S3 client for document bucket operations."""

    def __init__(self, bucket: str, region: str = "eu-west-1", client=None) -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            client: Pre-built boto3 S3 client (built from region if None)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> str:
        params = {"Bucket": self._bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            await run_in_threadpool(lambda: self._s3_client.put_object(**params))
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to upload {key}: {e}", operation="put") from e

        logger.info(
            f"{__name__}:put - Uploaded payload",
            extra={"bucket": self._bucket, "key": key, "size": len(data)},
        )
        return key

    async def get(self, path: str) -> bytes:
        try:
            response = await run_in_threadpool(
                lambda: self._s3_client.get_object(Bucket=self._bucket, Key=path)
            )
            return await run_in_threadpool(response["Body"].read)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to download {path}: {e}", operation="get") from e

    async def remove(self, path: str) -> None:
        try:
            await run_in_threadpool(
                lambda: self._s3_client.delete_object(Bucket=self._bucket, Key=path)
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete {path}: {e}", operation="remove") from e
