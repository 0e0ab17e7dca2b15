"""
Filesystem blob store for local development.

Dependencies: pathlib, fastapi.concurrency
System role: BlobStore adapter writing under a configured directory
"""

import logging
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from docqa.core.exceptions import StorageError

from .base import BlobStore

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """Store document payloads as files under a root directory."""

    def __init__(self, root: str | Path) -> None:
        """
        Initialize store, creating the root directory if needed.

        Args:
            root: Directory holding stored payloads
        """
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        resolved = (self._root / path).resolve()
        if self._root.resolve() not in resolved.parents:
            raise StorageError(f"Path escapes storage root: {path}", operation="resolve")
        return resolved

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> str:
        target = self._resolve(key)
        try:
            await run_in_threadpool(self._write, target, data)
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}", operation="put") from e

        logger.info(
            f"{__name__}:put - Stored payload",
            extra={"key": key, "size": len(data)},
        )
        return key

    async def get(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return await run_in_threadpool(target.read_bytes)
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}", operation="get") from e

    async def remove(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await run_in_threadpool(target.unlink, True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}", operation="remove") from e
