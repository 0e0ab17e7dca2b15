"""
Document status updater.

Persists ingestion state transitions on the Document record:
UPLOADED -> EXTRACTING -> CHUNKING -> EMBEDDING -> PROCESSED (or FAILED with error message)

Every transition appends {status, at} to doc_metadata["status_history"]
and is committed immediately so the state is visible to pollers.

Dependencies: sqlalchemy, docqa.boundary.db
System role: Database persistence layer for the ingestion pipeline
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.base import utcnow
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docqa.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)

MAX_ERROR_LENGTH = 2000


class DocumentStatusUpdater:
    """Update document status in the database during processing."""

    def __init__(self, db_session: AsyncSession) -> None:
        """
        Initialize with database session.

        Args:
            db_session: AsyncSession bound to the documents table
        """
        self.db = db_session

    async def mark_stage(self, document_id: UUID, status: DocumentStatus) -> None:
        """
        Record an in-progress pipeline stage.

        Args:
            document_id: Document UUID
            status: Stage being entered

        Raises:
            DocumentNotFoundError: Document was deleted
        """
        await self._transition(document_id, status, processed=False)

    async def mark_processed(self, document_id: UUID, chunk_count: int) -> None:
        """
        Mark document as PROCESSED.

        Args:
            document_id: Document UUID
            chunk_count: Number of chunks persisted

        Raises:
            DocumentNotFoundError: Document was deleted
        """
        await self._transition(
            document_id,
            DocumentStatus.PROCESSED,
            processed=True,
            extra_metadata={"chunk_count": chunk_count},
            drop_keys=("error",),
        )

    async def mark_failed(self, document_id: UUID, error_message: str) -> None:
        """
        Mark document as FAILED with error details.

        Args:
            document_id: Document UUID
            error_message: Human-readable error description

        Raises:
            DocumentNotFoundError: Document was deleted
        """
        truncated_error = error_message[:MAX_ERROR_LENGTH]
        await self._transition(
            document_id,
            DocumentStatus.FAILED,
            processed=False,
            extra_metadata={"error": truncated_error},
        )

    async def _transition(
        self,
        document_id: UUID,
        status: DocumentStatus,
        processed: bool,
        extra_metadata: dict[str, Any] | None = None,
        drop_keys: tuple[str, ...] = (),
    ) -> DocumentModel:
        try:
            document = await document_crud.get_by_id(self.db, document_id)
            if document is None:
                raise DocumentNotFoundError(str(document_id))

            # Copy so SQLAlchemy sees a new JSON value
            metadata = dict(document.doc_metadata or {})
            for key in drop_keys:
                metadata.pop(key, None)
            metadata.update(extra_metadata or {})
            history = list(metadata.get("status_history", []))
            history.append({"status": status.value, "at": utcnow().isoformat()})
            metadata["status_history"] = history

            document.status = status
            document.processed = processed
            document.doc_metadata = metadata
            await self.db.commit()

            logger.info(
                f"{__name__}:_transition - Document marked as {status.value.upper()}",
                extra={"document_id": str(document_id), "status": status.value},
            )
            return document

        except Exception as e:
            logger.error(f"{__name__}:_transition - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise
