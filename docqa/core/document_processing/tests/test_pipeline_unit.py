"""Unit tests for DocumentPipeline orchestration with mocked collaborators."""

import pytest
from uuid import uuid4
from unittest.mock import AsyncMock, MagicMock, patch
from types import SimpleNamespace

from docqa.boundary.db.models.document_model import DocumentStatus
from docqa.core.document_processing.configs import DocumentPipelineSettings
from docqa.core.document_processing.entrypoint import DocumentPipeline
from docqa.core.document_processing.models import TextSpan
from docqa.core.exceptions import EmbeddingError
from docqa.core.file_types import FileType

MODULE = "docqa.core.document_processing.entrypoint"


@pytest.fixture
def mock_session():
    """Session returned by the pipeline's session factory."""
    return AsyncMock()


@pytest.fixture
def session_factory(mock_session):
    """Callable returning an async context manager around mock_session."""
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=mock_session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


@pytest.fixture
def embedding_client():
    """Embedding client returning one vector per text."""
    client = MagicMock()
    client.embed_batch = AsyncMock(side_effect=lambda texts, start_index=0: [[0.1, 0.2] for _ in texts])
    return client


@pytest.fixture
def settings():
    """Small windows so a short text yields several chunks."""
    return DocumentPipelineSettings(
        chunk_size=100,
        chunk_overlap=0,
        min_chunk_length=50,
        batch_size=2,
        embedding_concurrency=5,
        embedding_max_attempts=1,
    )


@pytest.fixture
def mock_collaborators():
    """Patch document lookup, status updater, extraction and saving."""
    document = SimpleNamespace(file_type=FileType.DOCX, file_path="1-notitie.docx")
    with patch(f"{MODULE}.document_crud") as mock_crud, patch(
        f"{MODULE}.DocumentStatusUpdater"
    ) as mock_updater_class, patch(f"{MODULE}.ExtractionTask") as mock_extraction_class, patch(
        f"{MODULE}.SavingTask"
    ) as mock_saving_class:
        mock_crud.get_by_id = AsyncMock(return_value=document)

        updater = MagicMock()
        updater.mark_stage = AsyncMock()
        updater.mark_processed = AsyncMock()
        updater.mark_failed = AsyncMock()
        mock_updater_class.return_value = updater

        extraction = mock_extraction_class.return_value
        extraction.extract.return_value = [TextSpan(text="a" * 100 + "b" * 100 + "c" * 100)]

        saving = mock_saving_class.return_value
        saving.save = AsyncMock(side_effect=lambda db, document_id, chunks: len(chunks))

        yield {
            "crud": mock_crud,
            "updater": updater,
            "extraction": extraction,
            "saving": saving,
        }


@pytest.mark.asyncio
async def test_run_walks_every_stage(
    session_factory, mock_session, embedding_client, settings, mock_collaborators
):
    """Test successful run records each stage and commits per batch."""
    doc_id = uuid4()
    pipeline = DocumentPipeline(session_factory, embedding_client, settings=settings)

    result = await pipeline.run(doc_id, b"payload", FileType.DOCX)

    assert result.status == DocumentStatus.PROCESSED
    assert result.chunk_count == 3
    updater = mock_collaborators["updater"]
    assert [c.args[1] for c in updater.mark_stage.call_args_list] == [
        DocumentStatus.EXTRACTING,
        DocumentStatus.CHUNKING,
        DocumentStatus.EMBEDDING,
    ]
    updater.mark_processed.assert_called_once_with(doc_id, 3)
    updater.mark_failed.assert_not_called()
    assert [c.kwargs["start_index"] for c in embedding_client.embed_batch.call_args_list] == [0, 2]
    assert mock_session.commit.await_count == 2
    mock_collaborators["extraction"].extract.assert_called_once_with(b"payload", FileType.DOCX)


@pytest.mark.asyncio
async def test_run_records_failure_instead_of_raising(
    session_factory, mock_session, embedding_client, settings, mock_collaborators
):
    """Test embedding failure marks the document failed and rolls back."""
    embedding_client.embed_batch.side_effect = [
        [[0.1], [0.2]],
        EmbeddingError("Failed to generate embedding: timeout", chunk_index=2),
    ]
    doc_id = uuid4()
    pipeline = DocumentPipeline(session_factory, embedding_client, settings=settings)

    result = await pipeline.run(doc_id, b"payload", FileType.DOCX)

    assert result.status == DocumentStatus.FAILED
    assert result.chunk_count == 2
    assert "timeout" in result.error
    mock_session.rollback.assert_awaited_once()
    updater = mock_collaborators["updater"]
    updater.mark_failed.assert_called_once()
    assert updater.mark_failed.call_args.args[0] == doc_id
    updater.mark_processed.assert_not_called()


@pytest.mark.asyncio
async def test_run_survives_failure_recording_error(
    session_factory, embedding_client, settings, mock_collaborators
):
    """Test a failure while recording the failure is logged, not raised."""
    mock_collaborators["extraction"].extract.side_effect = ValueError("bad payload")
    mock_collaborators["updater"].mark_failed.side_effect = RuntimeError("document gone")
    pipeline = DocumentPipeline(session_factory, embedding_client, settings=settings)

    result = await pipeline.run(uuid4(), b"payload", FileType.DOCX)

    assert result.status == DocumentStatus.FAILED
    assert result.error == "bad payload"


@pytest.mark.asyncio
async def test_run_without_payload_or_blob_store_fails(
    session_factory, embedding_client, settings, mock_collaborators
):
    """Test missing payload with no blob store configured."""
    pipeline = DocumentPipeline(session_factory, embedding_client, settings=settings)

    result = await pipeline.run(uuid4())

    assert result.status == DocumentStatus.FAILED
    assert "No payload" in result.error
    mock_collaborators["updater"].mark_stage.assert_not_called()


@pytest.mark.asyncio
async def test_run_reads_payload_from_blob_store(
    session_factory, embedding_client, settings, mock_collaborators
):
    """Test payload and file type come from the stored document."""
    blob_store = MagicMock()
    blob_store.get = AsyncMock(return_value=b"stored bytes")
    pipeline = DocumentPipeline(session_factory, embedding_client, blob_store=blob_store, settings=settings)

    result = await pipeline.run(uuid4())

    assert result.status == DocumentStatus.PROCESSED
    blob_store.get.assert_awaited_once_with("1-notitie.docx")
    mock_collaborators["extraction"].extract.assert_called_once_with(b"stored bytes", FileType.DOCX)
