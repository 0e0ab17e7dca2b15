"""
Document ORM model.

Represents uploaded documents with processing status and metadata.
Tracks the ingestion lifecycle from upload to embedded chunks.

Dependencies: sqlalchemy, docqa.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docqa.boundary.db.base import Base, JSONType, TimestampMixin, UUIDMixin, utcnow
from docqa.core.file_types import FileType


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    UPLOADED: Blob stored and record created, ingestion queued
    EXTRACTING: Text is being extracted from the payload
    CHUNKING: Extracted text is being split into chunks
    EMBEDDING: Chunks are being embedded and inserted batch by batch
    PROCESSED: All chunks stored, ready for retrieval
    FAILED: Ingestion stopped; doc_metadata["error"] holds the reason
    """

    UPLOADED = "uploaded"
    EXTRACTING = "extracting"
    CHUNKING = "chunking"
    EMBEDDING = "embedding"
    PROCESSED = "processed"
    FAILED = "failed"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Lifecycle: Upload (UPLOADED) → background ingestion (EXTRACTING,
    CHUNKING, EMBEDDING) → PROCESSED, or FAILED from any stage. The
    processed flag only flips to True on the final transition.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Filename with extension stripped
        file_name: Original filename
        file_type: Detected format (pdf, docx, xlsx)
        file_path: Blob store path of the raw payload
        file_size: Payload size in bytes
        upload_date: Upload timestamp (UTC)
        processed: True once every chunk is stored
        status: Current processing state
        doc_metadata: Free-form metadata (error, content_type, status_history)

    Relationships:
        chunks: Owned ChunkModel rows (database-level cascade delete)
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    file_type: Mapped[FileType] = mapped_column(
        Enum(FileType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    file_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Blob store path for raw document",
    )

    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    processed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(
            DocumentStatus,
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=DocumentStatus.UPLOADED,
    )

    doc_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSONType,
        nullable=False,
        default=dict,
    )

    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
