"""
Embedding client adapter with bounded concurrency.

Wraps a ModelProvider: normalizes text before embedding, fans a batch out
with at most max_concurrency calls in flight, and fails the whole batch on
the first error (remaining calls are cancelled).

Dependencies: asyncio, tenacity, docqa.boundary.llm
System role: Third stage of document ingestion pipeline, query embedding
"""

import asyncio
import logging

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from docqa.boundary.llm import ModelProvider
from docqa.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Generate embeddings through a model provider."""

    def __init__(
        self,
        provider: ModelProvider,
        max_concurrency: int = 5,
        max_attempts: int = 1,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            provider: Model provider exposing embed(text)
            max_concurrency: Maximum embedding calls in flight
            max_attempts: Attempts per text (1 disables retry)

        Raises:
            ValueError: Non-positive concurrency or attempts
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._provider = provider
        self._max_concurrency = max_concurrency
        self._max_attempts = max_attempts

    @staticmethod
    def normalize(text: str) -> str:
        """Replace newlines with spaces."""
        return text.replace("\r\n", " ").replace("\n", " ")

    async def embed(self, text: str, chunk_index: int | None = None) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed
            chunk_index: Chunk position used to attribute failures

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: Provider call failed after all attempts
        """
        normalized = self.normalize(text)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_attempts),
                wait=wait_exponential(multiplier=0.5, max=8),
                retry=retry_if_exception_type(Exception),
                reraise=True,
            ):
                with attempt:
                    return await self._provider.embed(normalized)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embedding: {e}",
                chunk_index=chunk_index,
            ) from e

    async def embed_batch(self, texts: list[str], start_index: int = 0) -> list[list[float]]:
        """
        Embed several texts with bounded concurrency, failing fast.

        Args:
            texts: Texts to embed
            start_index: Chunk index of texts[0], used in error context

        Returns:
            list[list[float]]: Vectors in input order

        Raises:
            EmbeddingError: Any text failed; carries that text's chunk index
        """
        if not texts:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def embed_one(offset: int, text: str) -> list[float]:
            async with semaphore:
                return await self.embed(text, chunk_index=start_index + offset)

        tasks = [
            asyncio.create_task(embed_one(offset, text))
            for offset, text in enumerate(texts)
        ]
        try:
            return await asyncio.gather(*tasks)
        except EmbeddingError as e:
            logger.warning(
                f"{__name__}:embed_batch - Batch failed, cancelling remaining calls",
                extra={"chunk_index": e.chunk_index, "batch_size": len(texts)},
            )
            raise
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
