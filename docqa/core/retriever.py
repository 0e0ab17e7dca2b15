"""
Retrieval engine over stored chunk embeddings.

Embeds the query and asks the vector store for the chunks whose cosine
similarity clears a threshold, optionally restricted to one document
format, best match first and capped at top_k.

Dependencies: docqa.boundary.db.CRUD, docqa.core.document_processing.tasks
System role: RAG retrieval business logic
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.configs.retrieval import RetrievalSettings
from docqa.core.document_processing.tasks.embedding_task import EmbeddingClient
from docqa.core.exceptions import ValidationError
from docqa.core.file_types import FileType
from docqa.models.search import SearchResult

logger = logging.getLogger(__name__)


class Retriever:
    """Similarity search business logic."""

    def __init__(self, embedding_client: EmbeddingClient, settings: RetrievalSettings) -> None:
        """
        Initialize retriever.

        Args:
            embedding_client: Client used to embed queries
            settings: Default threshold and top_k
        """
        self._embedding_client = embedding_client
        self._settings = settings

    async def search(
        self,
        db: AsyncSession,
        query: str,
        threshold: float | None = None,
        top_k: int | None = None,
        file_type: FileType | None = None,
    ) -> list[SearchResult]:
        """
        Retrieve the chunks most similar to a query.

        Args:
            db: Async database session
            query: Natural-language question
            threshold: Minimum cosine similarity (configured default if None)
            top_k: Maximum results (configured default if None)
            file_type: Restrict to documents of this format

        Returns:
            list[SearchResult]: Best match first; empty when nothing clears the threshold

        Raises:
            ValidationError: Empty query or out-of-range threshold/top_k
            EmbeddingError: Query embedding failed
        """
        if not query or not query.strip():
            raise ValidationError("Query cannot be empty", field="query")

        threshold = self._settings.match_threshold if threshold is None else threshold
        top_k = self._settings.top_k if top_k is None else top_k
        if not 0.0 <= threshold <= 1.0:
            raise ValidationError(f"Threshold must be between 0 and 1, got {threshold}", field="threshold")
        if top_k < 1:
            raise ValidationError(f"top_k must be at least 1, got {top_k}", field="top_k")

        query_embedding = await self._embedding_client.embed(query)
        results = await chunk_crud.match_documents(
            db,
            query_embedding=query_embedding,
            match_threshold=threshold,
            match_count=top_k,
            filter_file_type=file_type,
        )

        logger.info(
            f"{__name__}:search - Retrieved {len(results)} chunks",
            extra={"threshold": threshold, "top_k": top_k, "query_len": len(query)},
        )
        return results
