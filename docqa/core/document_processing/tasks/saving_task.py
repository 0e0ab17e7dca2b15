"""
Chunk persistence task.

Bulk inserts one batch of embedded chunks for a document.

Dependencies: sqlalchemy, docqa.boundary.db.CRUD
System role: Final stage of document ingestion pipeline
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud

from ..models import Chunk


class SavingTask:
    """Insert embedded chunks into the vector store."""

    async def save(self, db: AsyncSession, document_id: UUID, chunks: list[Chunk]) -> int:
        """
        Insert a batch of chunks in one bulk write.

        Args:
            db: Async database session (caller commits)
            document_id: Owning document
            chunks: Chunks with embeddings set

        Returns:
            int: Number of rows inserted

        Raises:
            ValueError: A chunk has no embedding
        """
        records = []
        for chunk in chunks:
            if chunk.embedding is None:
                raise ValueError(f"Chunk {chunk.chunk_index} has no embedding")
            records.append(
                {
                    "document_id": document_id,
                    "content": chunk.content,
                    "embedding": chunk.embedding,
                    "chunk_index": chunk.chunk_index,
                    "page_number": chunk.page_number,
                    "sheet_name": chunk.sheet_name,
                    "chunk_metadata": chunk.metadata,
                }
            )

        await chunk_crud.create_many(db, records)
        return len(records)
