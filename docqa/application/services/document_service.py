"""
Document service orchestrator.

Coordinates document upload, listing and deletion. Upload stores the raw
bytes and the Document record synchronously, then hands ingestion to the
background task runner.

Dependencies: docqa.boundary.db, docqa.boundary.storage, docqa.core
System role: Document management orchestration
"""

import logging
import time
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docqa.application.services.ingestion_runner import IngestionTaskRunner
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.base import utcnow
from docqa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docqa.boundary.storage import BlobStore
from docqa.core.document_processing.entrypoint import DocumentPipeline
from docqa.core.exceptions import DocumentNotFoundError, StorageError, ValidationError
from docqa.core.file_types import base_filename, detect_file_type, title_from_filename
from docqa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: upload, status lookup, listing, deletion.
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        pipeline: DocumentPipeline,
        task_runner: IngestionTaskRunner,
        max_upload_bytes: int | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document records
            blob_store: Raw payload storage
            pipeline: Ingestion pipeline run in the background
            task_runner: Runner for detached ingestion tasks
            max_upload_bytes: Largest accepted payload (unlimited if None)
        """
        self.db = db
        self._blob_store = blob_store
        self._pipeline = pipeline
        self._task_runner = task_runner
        self._max_upload_bytes = max_upload_bytes

    @staticmethod
    def build_storage_key(filename: str) -> str:
        """Storage key: millisecond timestamp prefix plus original filename."""
        return f"{int(time.time() * 1000)}-{filename}"

    async def upload_document(
        self,
        filename: str | None,
        payload: bytes,
        content_type: str | None = None,
    ) -> DocumentModel:
        """
        Store a document and schedule its ingestion.

        Steps:
        1. Validate filename, size and format
        2. Write bytes to blob storage
        3. Create document record with UPLOADED status and commit
        4. Submit ingestion to the background runner

        Args:
            filename: Original filename
            payload: Raw file bytes
            content_type: MIME type declared by the client

        Returns:
            DocumentModel: Created document (ingestion still pending)

        Raises:
            ValidationError: Missing/empty/oversized file or unsupported format
            StorageError: Blob write or record creation failed
        """
        if filename:
            filename = base_filename(filename)
        if not filename:
            raise ValidationError("No file provided", field="file")
        if not payload:
            raise ValidationError("Uploaded file is empty", field="file")
        if self._max_upload_bytes is not None and len(payload) > self._max_upload_bytes:
            raise ValidationError(
                f"File exceeds maximum size of {self._max_upload_bytes} bytes",
                field="file",
                details={"size": len(payload)},
            )
        file_type = detect_file_type(filename)

        key = self.build_storage_key(filename)
        file_path = await self._blob_store.put(key, payload, content_type)

        try:
            document = await document_crud.create(
                self.db,
                title=title_from_filename(filename),
                file_name=filename,
                file_type=file_type,
                file_path=file_path,
                file_size=len(payload),
                processed=False,
                status=DocumentStatus.UPLOADED,
                doc_metadata={
                    "content_type": content_type,
                    "status_history": [
                        {"status": DocumentStatus.UPLOADED.value, "at": utcnow().isoformat()}
                    ],
                },
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:upload_document - Record creation failed, removing blob",
                e,
                file_path=file_path,
            )
            await self._remove_blob_quietly(file_path)
            raise StorageError(
                f"Failed to create document record: {e}",
                operation="insert",
                details={"file_name": filename},
            ) from e

        self._task_runner.submit(
            self._pipeline.run(document.id, payload, file_type),
            name=f"ingest-{document.id}",
        )

        logger.info(
            f"{__name__}:upload_document - Document stored, ingestion scheduled",
            extra={
                "document_id": str(document.id),
                "file_type": file_type.value,
                "file_size": len(payload),
            },
        )
        return document

    async def get_document(self, document_id: UUID) -> DocumentModel:
        """
        Get a document record.

        Raises:
            DocumentNotFoundError: No document with this id
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document

    async def list_documents(self) -> Sequence[DocumentModel]:
        """
        List all documents, most recent upload first.

        Returns:
            Sequence[DocumentModel]: Document records
        """
        return await document_crud.get_all_recent_first(self.db)

    async def delete_document(self, document_id: UUID) -> None:
        """
        Delete a document's blob, record and (by cascade) chunks.

        A blob removal failure is logged and does not stop record deletion.

        Args:
            document_id: Document UUID

        Raises:
            DocumentNotFoundError: No document with this id
        """
        document = await self.get_document(document_id)

        await self._remove_blob_quietly(document.file_path)

        await document_crud.delete_by_id(self.db, document_id)
        await self.db.commit()

        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"document_id": str(document_id)},
        )

    async def _remove_blob_quietly(self, file_path: str) -> None:
        try:
            await self._blob_store.remove(file_path)
        except StorageError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_remove_blob_quietly - Blob removal failed",
                e,
                file_path=file_path,
            )
