"""
Chunk CRUD operations and similarity search.

Bulk inserts embedded chunks and runs the match_documents query:
cosine similarity between a query vector and every stored chunk vector,
thresholded, optionally filtered by document format, ordered by
similarity and truncated to the requested count.

PostgreSQL evaluates the query with pgvector's cosine distance operator.
Other dialects (SQLite for local development and tests) fetch candidate
rows and score them in-process with numpy.

Dependencies: sqlalchemy, pgvector, numpy
System role: Chunk persistence and vector retrieval
"""

import logging
from typing import Sequence
from uuid import UUID

import numpy as np
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.base_crud import BaseCRUD
from docqa.boundary.db.models.chunk_model import ChunkModel
from docqa.boundary.db.models.document_model import DocumentModel
from docqa.core.file_types import FileType
from docqa.models.search import SearchResult

logger = logging.getLogger(__name__)

_RESULT_COLUMNS = (
    ChunkModel.id,
    ChunkModel.document_id,
    ChunkModel.content,
    ChunkModel.chunk_index,
    ChunkModel.page_number,
    ChunkModel.sheet_name,
    DocumentModel.file_name,
    DocumentModel.file_type,
)


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """
    CRUD operations for ChunkModel.

    Chunks are immutable: only bulk creation, reads and the similarity
    query are exposed. Deletion happens through the documents FK cascade.
    """

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve a document's chunks in chunk_index order.

        Args:
            session: Async database session
            document_id: Owning document UUID

        Returns:
            Sequence of ChunkModels
        """
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        """Count stored chunks for a document."""
        stmt = select(func.count(ChunkModel.id)).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def match_documents(
        self,
        session: AsyncSession,
        query_embedding: list[float],
        match_threshold: float,
        match_count: int,
        filter_file_type: FileType | None = None,
    ) -> list[SearchResult]:
        """
        Find chunks most similar to a query vector.

        Args:
            session: Async database session
            query_embedding: Query vector (same dimension as stored chunks)
            match_threshold: Minimum cosine similarity, inclusive
            match_count: Maximum number of rows returned
            filter_file_type: Only consider chunks of documents with this format

        Returns:
            list[SearchResult]: Highest similarity first; empty when nothing clears the threshold
        """
        if session.get_bind().dialect.name == "postgresql":
            results = await self._match_in_database(
                session, query_embedding, match_threshold, match_count, filter_file_type
            )
        else:
            results = await self._match_in_process(
                session, query_embedding, match_threshold, match_count, filter_file_type
            )

        logger.info(
            f"{__name__}:match_documents - Found {len(results)} results",
            extra={
                "match_threshold": match_threshold,
                "match_count": match_count,
                "filter_file_type": filter_file_type.value if filter_file_type else None,
            },
        )
        return results

    def build_match_statement(
        self,
        query_embedding: list[float],
        match_threshold: float,
        match_count: int,
        filter_file_type: FileType | None = None,
    ):
        """
        Build the pgvector similarity statement.

        Returns:
            Select: Statement yielding result columns plus a similarity column
        """
        distance = ChunkModel.embedding.cosine_distance(query_embedding)
        similarity = (1 - distance).label("similarity")

        stmt = (
            select(*_RESULT_COLUMNS, similarity)
            .join(DocumentModel, ChunkModel.document_id == DocumentModel.id)
            .where(1 - distance >= match_threshold)
        )
        if filter_file_type is not None:
            stmt = stmt.where(DocumentModel.file_type == filter_file_type)
        return stmt.order_by(distance).limit(match_count)

    async def _match_in_database(
        self,
        session: AsyncSession,
        query_embedding: list[float],
        match_threshold: float,
        match_count: int,
        filter_file_type: FileType | None,
    ) -> list[SearchResult]:
        stmt = self.build_match_statement(
            query_embedding, match_threshold, match_count, filter_file_type
        )
        result = await session.execute(stmt)
        return [self._to_result(row, float(row.similarity)) for row in result]

    async def _match_in_process(
        self,
        session: AsyncSession,
        query_embedding: list[float],
        match_threshold: float,
        match_count: int,
        filter_file_type: FileType | None,
    ) -> list[SearchResult]:
        stmt = select(*_RESULT_COLUMNS, ChunkModel.embedding).join(
            DocumentModel, ChunkModel.document_id == DocumentModel.id
        )
        if filter_file_type is not None:
            stmt = stmt.where(DocumentModel.file_type == filter_file_type)

        rows = (await session.execute(stmt)).all()
        if not rows:
            return []

        query = np.asarray(query_embedding, dtype=float)
        matrix = np.vstack([np.asarray(row.embedding, dtype=float) for row in rows])
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        with np.errstate(divide="ignore", invalid="ignore"):
            scores = np.where(norms > 0, matrix @ query / norms, 0.0)

        order = np.argsort(-scores, kind="stable")
        results = []
        for position in order:
            score = float(scores[position])
            if score < match_threshold:
                break
            results.append(self._to_result(rows[position], score))
            if len(results) >= match_count:
                break
        return results

    @staticmethod
    def _to_result(row, similarity: float) -> SearchResult:
        return SearchResult(
            id=row.id,
            document_id=row.document_id,
            content=row.content,
            similarity=similarity,
            file_name=row.file_name,
            file_type=row.file_type,
            chunk_index=row.chunk_index,
            page_number=row.page_number,
            sheet_name=row.sheet_name,
        )


chunk_crud = ChunkCRUD()
