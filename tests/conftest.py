"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite database, fake model provider, in-memory blob
store, pipeline settings and document factories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from docqa.boundary.db.base import Base
from docqa.boundary.db.connection import enable_sqlite_foreign_keys
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docqa.configs.retrieval import RetrievalSettings
from docqa.core.document_processing.configs import DocumentPipelineSettings
from docqa.core.file_types import FileType
from tests.fakes import FakeModelProvider, InMemoryBlobStore


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Foreign keys are enforced so ON DELETE CASCADE behaves as on PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    """Session factory bound to the test engine."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create a session on the in-memory database.

    Yields:
        AsyncSession: Test database session
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def fake_provider() -> FakeModelProvider:
    """Model provider with deterministic embeddings."""
    return FakeModelProvider()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    """Blob store keeping payloads in memory."""
    return InMemoryBlobStore()


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    """Pipeline settings with production defaults, independent of the environment."""
    return DocumentPipelineSettings(
        chunk_size=3000,
        chunk_overlap=150,
        min_chunk_length=50,
        batch_size=5,
        embedding_concurrency=5,
        embedding_max_attempts=1,
    )


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    """Retrieval settings with production defaults."""
    return RetrievalSettings(match_threshold=0.5, top_k=5)


@pytest.fixture
def create_document(test_async_db):
    """
    Factory inserting a committed document record.

    Returns:
        Callable: async (file_name, file_type, **overrides) -> DocumentModel
    """

    async def _create(
        file_name: str = "rapport.pdf",
        file_type: FileType = FileType.PDF,
        **overrides,
    ) -> DocumentModel:
        values = {
            "title": file_name.rsplit(".", 1)[0],
            "file_name": file_name,
            "file_type": file_type,
            "file_path": f"memory/{uuid.uuid4()}-{file_name}",
            "file_size": 1024,
            "processed": False,
            "status": DocumentStatus.UPLOADED,
            "doc_metadata": {},
        }
        values.update(overrides)
        document = await document_crud.create(test_async_db, **values)
        await test_async_db.commit()
        return document

    return _create
