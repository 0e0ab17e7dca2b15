"""
Document ingestion pipeline orchestrator.

Coordinates extraction, chunking, batched embedding and chunk persistence
for one uploaded document, recording each state transition on the
Document record. Runs detached from the upload request, so it never
raises: failures are written to the document's status and metadata.
Cancellation marks the document failed before propagating.

Dependencies: All task modules, configs, docqa.boundary.db, docqa.boundary.storage
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
from typing import AsyncIterator
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.models.document_model import DocumentStatus
from docqa.boundary.storage import BlobStore
from docqa.core.file_types import FileType
from docqa.observability.log_utils import log_exception_with_context

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .database import DocumentStatusUpdater
from .models import Chunk, PipelineResult
from .tasks import ChunkingTask, EmbeddingClient, ExtractionTask, SavingTask

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: extract -> chunk -> embed -> save."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedding_client: EmbeddingClient,
        blob_store: BlobStore | None = None,
        settings: DocumentPipelineSettings | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            session_factory: Factory for the pipeline's own database sessions
            embedding_client: Embedding adapter shared with the query path
            blob_store: Store used to re-read payloads when none is passed in
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._session_factory = session_factory
        self._embedding_client = embedding_client
        self._blob_store = blob_store

        self._extraction_task = ExtractionTask()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
            min_chunk_length=self._settings.min_chunk_length,
        )
        self._saving_task = SavingTask()

    async def run(
        self,
        document_id: UUID,
        payload: bytes | None = None,
        file_type: FileType | None = None,
    ) -> PipelineResult:
        """
        Process one document through the full pipeline.

        Args:
            document_id: Document to ingest
            payload: Raw bytes kept from the upload (read from the blob store if None)
            file_type: Detected format (taken from the record if None)

        Returns:
            PipelineResult: Terminal status, chunk count and error

        Raises:
            asyncio.CancelledError: Task cancelled; the document is marked failed first
        """
        start_time = time.perf_counter()
        chunk_count = 0

        async with self._session_factory() as db:
            updater = DocumentStatusUpdater(db)
            try:
                document = await document_crud.get_by_id(db, document_id)
                if document is None:
                    logger.warning(
                        f"{__name__}:run - Document no longer exists, skipping ingestion",
                        extra={"document_id": str(document_id)},
                    )
                    return PipelineResult(
                        document_id=str(document_id),
                        status=DocumentStatus.FAILED,
                        error="Document not found",
                    )

                file_type = file_type or document.file_type
                if payload is None:
                    if self._blob_store is None:
                        raise ValueError("No payload supplied and no blob store configured")
                    payload = await self._blob_store.get(document.file_path)

                await updater.mark_stage(document_id, DocumentStatus.EXTRACTING)
                spans = await run_in_threadpool(self._extraction_task.extract, payload, file_type)

                await updater.mark_stage(document_id, DocumentStatus.CHUNKING)
                chunks = self._chunking_task.chunk(spans, file_type)

                await updater.mark_stage(document_id, DocumentStatus.EMBEDDING)
                async for saved in self._embed_and_save(db, document_id, chunks):
                    chunk_count = saved

                await updater.mark_processed(document_id, chunk_count)

            except asyncio.CancelledError:
                logger.warning(
                    f"{__name__}:run - Ingestion cancelled",
                    extra={"document_id": str(document_id), "chunks_saved": chunk_count},
                )
                await asyncio.shield(self._record_cancellation(db, updater, document_id))
                raise

            except Exception as e:
                await db.rollback()
                log_exception_with_context(
                    logger,
                    f"{__name__}:run - Ingestion failed",
                    e,
                    document_id=str(document_id),
                    chunks_saved=chunk_count,
                )
                await self._record_failure(updater, document_id, str(e))
                return PipelineResult(
                    document_id=str(document_id),
                    status=DocumentStatus.FAILED,
                    chunk_count=chunk_count,
                    error=str(e),
                    processing_time_ms=(time.perf_counter() - start_time) * 1000,
                )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:run - Document processed",
            extra={
                "document_id": str(document_id),
                "chunk_count": chunk_count,
                "processing_time_ms": round(elapsed_ms, 1),
            },
        )
        return PipelineResult(
            document_id=str(document_id),
            status=DocumentStatus.PROCESSED,
            chunk_count=chunk_count,
            processing_time_ms=elapsed_ms,
        )

    async def _embed_and_save(
        self,
        db: AsyncSession,
        document_id: UUID,
        chunks: list[Chunk],
    ) -> AsyncIterator[int]:
        """
        Embed and insert chunks batch by batch, committing after each batch.

        Yields:
            int: Number of chunks committed so far
        """
        batch_size = self._settings.batch_size
        saved = 0
        for start in range(0, len(chunks), batch_size):
            batch = chunks[start:start + batch_size]
            vectors = await self._embedding_client.embed_batch(
                [chunk.content for chunk in batch],
                start_index=batch[0].chunk_index,
            )
            for chunk, vector in zip(batch, vectors):
                chunk.embedding = vector

            saved += await self._saving_task.save(db, document_id, batch)
            await db.commit()

            logger.info(
                f"{__name__}:_embed_and_save - Batch committed",
                extra={
                    "document_id": str(document_id),
                    "saved": saved,
                    "total_chunks": len(chunks),
                },
            )
            yield saved

    async def _record_failure(
        self,
        updater: DocumentStatusUpdater,
        document_id: UUID,
        error_message: str,
    ) -> None:
        try:
            await updater.mark_failed(document_id, error_message)
        except Exception as e:
            # Document deleted while ingesting; nothing left to record on
            log_exception_with_context(
                logger,
                f"{__name__}:_record_failure - Could not record failure",
                e,
                document_id=str(document_id),
            )

    async def _record_cancellation(
        self,
        db: AsyncSession,
        updater: DocumentStatusUpdater,
        document_id: UUID,
    ) -> None:
        """Roll back the interrupted batch and leave the document in a terminal state."""
        await db.rollback()
        await self._record_failure(updater, document_id, "Ingestion cancelled")
