"""
Chunk ORM model.

One retrievable unit of document text with its pgvector embedding.
Rows are written once by the ingestion pipeline and never updated.

Dependencies: sqlalchemy, pgvector, docqa.boundary.db.base, docqa.configs
System role: Vector persistence for similarity search
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docqa.boundary.db.base import Base, JSONType, TimestampMixin, UUIDMixin
from docqa.configs import get_settings

EMBEDDING_DIMENSION = get_settings().model_provider.embedding_dimension


class ChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Chunk ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Owning document (ON DELETE CASCADE)
        content: Trimmed chunk text
        embedding: Vector of EMBEDDING_DIMENSION floats
        chunk_index: 0-based position within the document, contiguous
        page_number: Source page (PDF only)
        sheet_name: Source sheet (Excel only)
        chunk_metadata: chunk_size (bytes) and total_chunks at creation time

    Constraints:
        (document_id, chunk_index) unique
    """

    __tablename__ = "document_chunks"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    embedding: Mapped[list[float]] = mapped_column(
        Vector(EMBEDDING_DIMENSION),
        nullable=False,
    )

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)

    page_number: Mapped[int | None] = mapped_column(Integer, nullable=True)

    sheet_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    chunk_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSONType,
        nullable=False,
        default=dict,
    )

    document = relationship("DocumentModel", back_populates="chunks")

    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_chunks_document_index"),
        Index("idx_chunks_document", "document_id"),
    )
