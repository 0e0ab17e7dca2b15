"""
End-to-end ingestion scenarios against in-memory SQLite.

Drives DocumentPipeline.run() with a fake model provider and checks the
persisted document state and chunks afterwards through fresh sessions.

System role: Verification of the ingestion state machine and batch commits
"""

import asyncio
from io import BytesIO
from unittest.mock import MagicMock, patch

import docx
import pytest

from docqa.application.services.ingestion_runner import IngestionTaskRunner
from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.models.document_model import DocumentStatus
from docqa.core.document_processing.configs import DocumentPipelineSettings
from docqa.core.document_processing.entrypoint import DocumentPipeline
from docqa.core.document_processing.models import TextSpan
from docqa.core.document_processing.tasks.embedding_task import EmbeddingClient
from docqa.core.document_processing.tasks.extraction_task import ExtractionTask
from docqa.core.file_types import FileType
from tests.fakes import FakeModelProvider


def _docx_bytes(*paragraphs: str) -> bytes:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _block(label: str) -> str:
    """100-character block starting with a label."""
    return (label + " " + "x" * 100)[:100]


async def _reload(session_factory, document_id):
    async with session_factory() as db:
        document = await document_crud.get_by_id(db, document_id)
        chunks = await chunk_crud.get_by_document_id(db, document_id)
        return document, list(chunks)


@pytest.fixture
def small_batch_settings() -> DocumentPipelineSettings:
    """100-character windows without overlap, three chunks per batch."""
    return DocumentPipelineSettings(
        chunk_size=100,
        chunk_overlap=0,
        min_chunk_length=50,
        batch_size=3,
        embedding_concurrency=5,
        embedding_max_attempts=1,
    )


class TestSuccessfulIngestion:
    """Documents that make it to PROCESSED."""

    @pytest.mark.asyncio
    async def test_ten_thousand_character_pdf_yields_four_chunks(
        self, session_factory, create_document, fake_provider, pipeline_settings
    ) -> None:
        # Arrange
        document = await create_document("jaarverslag.pdf", FileType.PDF)
        page = MagicMock()
        page.extract_text.return_value = "abcdefghij" * 1000
        reader = MagicMock(is_encrypted=False, pages=[page])
        pipeline = DocumentPipeline(session_factory, EmbeddingClient(fake_provider), settings=pipeline_settings)

        # Act
        with patch(
            "docqa.core.document_processing.tasks.extraction_task.PdfReader",
            return_value=reader,
        ):
            result = await pipeline.run(document.id, b"%PDF-1.7", FileType.PDF)

        # Assert
        stored, chunks = await _reload(session_factory, document.id)
        assert result.status == DocumentStatus.PROCESSED
        assert result.chunk_count == 4
        assert stored.processed is True
        assert stored.status == DocumentStatus.PROCESSED
        assert stored.doc_metadata["chunk_count"] == 4
        assert "error" not in stored.doc_metadata
        assert [entry["status"] for entry in stored.doc_metadata["status_history"]] == [
            "extracting",
            "chunking",
            "embedding",
            "processed",
        ]
        assert [c.chunk_index for c in chunks] == [0, 1, 2, 3]
        assert all(c.page_number == 1 for c in chunks)
        assert len(chunks[-1].content) == 1450
        assert chunks[0].chunk_metadata == {"chunk_size": 3000, "total_chunks": 4}
        assert len(fake_provider.embed_calls) == 4

    @pytest.mark.asyncio
    async def test_payload_read_from_blob_store_when_not_passed(
        self, session_factory, create_document, fake_provider, blob_store, small_batch_settings
    ) -> None:
        # Arrange
        path = await blob_store.put("1-notitie.docx", _docx_bytes(_block("alinea")))
        document = await create_document("notitie.docx", FileType.DOCX, file_path=path)
        pipeline = DocumentPipeline(
            session_factory,
            EmbeddingClient(fake_provider),
            blob_store=blob_store,
            settings=small_batch_settings,
        )

        # Act
        result = await pipeline.run(document.id)

        # Assert
        _, chunks = await _reload(session_factory, document.id)
        assert result.status == DocumentStatus.PROCESSED
        assert len(chunks) == 1
        assert chunks[0].content.startswith("alinea")


class TestFailedIngestion:
    """Documents that end in FAILED."""

    @pytest.mark.asyncio
    async def test_embedding_failure_keeps_earlier_batches(
        self, session_factory, create_document, small_batch_settings
    ) -> None:
        # Arrange
        blocks = [_block("blok0"), _block("blok1"), _block("blok2"), _block("FOUT blok3"), _block("blok4")]
        document = await create_document("notitie.docx", FileType.DOCX)
        provider = FakeModelProvider(fail_when="FOUT")
        pipeline = DocumentPipeline(session_factory, EmbeddingClient(provider), settings=small_batch_settings)

        # Act
        with patch.object(ExtractionTask, "extract", return_value=[TextSpan(text="".join(blocks))]):
            result = await pipeline.run(document.id, b"docx", FileType.DOCX)

        # Assert
        stored, chunks = await _reload(session_factory, document.id)
        assert result.status == DocumentStatus.FAILED
        assert result.chunk_count == 3
        assert stored.processed is False
        assert stored.status == DocumentStatus.FAILED
        assert "embedding backend unavailable" in stored.doc_metadata["error"]
        assert "'chunk_index': 3" in stored.doc_metadata["error"]
        assert [c.chunk_index for c in chunks] == [0, 1, 2]
        assert stored.doc_metadata["status_history"][-1]["status"] == "failed"

    @pytest.mark.asyncio
    async def test_corrupt_payload_marks_failed_without_chunks(
        self, session_factory, create_document, fake_provider, pipeline_settings
    ) -> None:
        document = await create_document("kapot.docx", FileType.DOCX)
        pipeline = DocumentPipeline(session_factory, EmbeddingClient(fake_provider), settings=pipeline_settings)

        result = await pipeline.run(document.id, b"geen zip archief", FileType.DOCX)

        stored, chunks = await _reload(session_factory, document.id)
        assert result.status == DocumentStatus.FAILED
        assert stored.status == DocumentStatus.FAILED
        assert stored.doc_metadata["error"]
        assert chunks == []
        assert fake_provider.embed_calls == []

    @pytest.mark.asyncio
    async def test_deleted_document_is_skipped(
        self, session_factory, create_document, fake_provider, pipeline_settings
    ) -> None:
        # Arrange
        document = await create_document("weg.pdf", FileType.PDF)
        async with session_factory() as db:
            await document_crud.delete_by_id(db, document.id)
            await db.commit()
        pipeline = DocumentPipeline(session_factory, EmbeddingClient(fake_provider), settings=pipeline_settings)

        # Act
        result = await pipeline.run(document.id, b"%PDF-1.7", FileType.PDF)

        # Assert
        assert result.status == DocumentStatus.FAILED
        assert result.error == "Document not found"
        assert fake_provider.embed_calls == []

    @pytest.mark.asyncio
    async def test_missing_blob_marks_failed(
        self, session_factory, create_document, fake_provider, blob_store, pipeline_settings
    ) -> None:
        document = await create_document("zoek.pdf", FileType.PDF, file_path="memory/ontbreekt.pdf")
        pipeline = DocumentPipeline(
            session_factory,
            EmbeddingClient(fake_provider),
            blob_store=blob_store,
            settings=pipeline_settings,
        )

        result = await pipeline.run(document.id)

        stored, _ = await _reload(session_factory, document.id)
        assert result.status == DocumentStatus.FAILED
        assert "Missing object" in stored.doc_metadata["error"]


class TestCancelledIngestion:
    """Runs interrupted by runner shutdown."""

    @pytest.mark.asyncio
    async def test_shutdown_marks_in_flight_document_failed(
        self, session_factory, create_document, small_batch_settings
    ) -> None:
        # Arrange
        blocks = [_block("blok0"), _block("blok1"), _block("blok2")]
        document = await create_document("traag.docx", FileType.DOCX)
        provider = FakeModelProvider(delay=10.0)
        pipeline = DocumentPipeline(session_factory, EmbeddingClient(provider), settings=small_batch_settings)
        runner = IngestionTaskRunner()

        with patch.object(ExtractionTask, "extract", return_value=[TextSpan(text="".join(blocks))]):
            task = runner.submit(pipeline.run(document.id, b"docx", FileType.DOCX), name="ingest-traag")
            for _ in range(200):
                if provider.embed_calls:
                    break
                await asyncio.sleep(0.01)

            # Act
            await runner.shutdown(timeout=0.1)

        # Assert
        stored, chunks = await _reload(session_factory, document.id)
        assert task.cancelled()
        assert runner.pending == 0
        assert stored.status == DocumentStatus.FAILED
        assert stored.processed is False
        assert stored.doc_metadata["error"] == "Ingestion cancelled"
        assert [entry["status"] for entry in stored.doc_metadata["status_history"]][-2:] == [
            "embedding",
            "failed",
        ]
        assert chunks == []
