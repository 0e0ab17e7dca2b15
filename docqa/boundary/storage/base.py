"""
Blob store interface.

Dependencies: abc
System role: Port for raw document payload storage
"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Stores raw document bytes under generated keys."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str | None = None) -> str:
        """
        Store bytes under a key.

        Args:
            key: Object key, unique per upload
            data: Raw bytes
            content_type: Optional MIME type recorded with the object

        Returns:
            str: Path to pass back to get/remove

        Raises:
            StorageError: Write failed
        """

    @abstractmethod
    async def get(self, path: str) -> bytes:
        """
        Read stored bytes.

        Raises:
            StorageError: Object missing or read failed
        """

    @abstractmethod
    async def remove(self, path: str) -> None:
        """
        Delete stored bytes. Removing a missing object is not an error.

        Raises:
            StorageError: Delete failed
        """
