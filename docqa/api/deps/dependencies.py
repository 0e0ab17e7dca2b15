"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived clients (blob
store, model provider, pipeline, task runner) are built once in the
ServiceCache; request-scoped services get a fresh database session.

Dependencies: docqa.configs, docqa.application, docqa.boundary, docqa.core
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.application.services import DocumentService, IngestionTaskRunner, SearchService
from docqa.boundary.db import get_async_db, get_async_session_factory
from docqa.boundary.llm import ModelProvider, get_model_provider
from docqa.boundary.storage import BlobStore, get_blob_store
from docqa.configs import Settings, get_settings
from docqa.core.answer_synthesizer import AnswerSynthesizer
from docqa.core.document_processing import DocumentPipeline, get_pipeline_settings
from docqa.core.document_processing.tasks import EmbeddingClient
from docqa.core.retriever import Retriever


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._blob_store: BlobStore | None = None
        self._model_provider: ModelProvider | None = None
        self._embedding_client: EmbeddingClient | None = None
        self._task_runner: IngestionTaskRunner | None = None
        self._document_pipeline: DocumentPipeline | None = None
        self._retriever: Retriever | None = None
        self._answer_synthesizer: AnswerSynthesizer | None = None

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def blob_store(self) -> BlobStore:
        """Get cached blob store."""
        if self._blob_store is None:
            self._blob_store = get_blob_store(self.settings.storage)
        return self._blob_store

    @property
    def model_provider(self) -> ModelProvider:
        """Get cached model provider."""
        if self._model_provider is None:
            self._model_provider = get_model_provider(self.settings.model_provider)
        return self._model_provider

    @property
    def embedding_client(self) -> EmbeddingClient:
        """Get cached embedding client shared by ingestion and search."""
        if self._embedding_client is None:
            pipeline_settings = get_pipeline_settings()
            self._embedding_client = EmbeddingClient(
                provider=self.model_provider,
                max_concurrency=pipeline_settings.embedding_concurrency,
                max_attempts=pipeline_settings.embedding_max_attempts,
            )
        return self._embedding_client

    @property
    def task_runner(self) -> IngestionTaskRunner:
        """Get cached ingestion task runner."""
        if self._task_runner is None:
            self._task_runner = IngestionTaskRunner()
        return self._task_runner

    @property
    def document_pipeline(self) -> DocumentPipeline:
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            self._document_pipeline = DocumentPipeline(
                session_factory=get_async_session_factory(),
                embedding_client=self.embedding_client,
                blob_store=self.blob_store,
                settings=get_pipeline_settings(),
            )
        return self._document_pipeline

    @property
    def retriever(self) -> Retriever:
        """Get cached retriever."""
        if self._retriever is None:
            self._retriever = Retriever(self.embedding_client, self.settings.retrieval)
        return self._retriever

    @property
    def answer_synthesizer(self) -> AnswerSynthesizer:
        """Get cached answer synthesizer."""
        if self._answer_synthesizer is None:
            self._answer_synthesizer = AnswerSynthesizer(self.model_provider, self.settings.retrieval)
        return self._answer_synthesizer

    async def shutdown(self) -> None:
        """Stop the task runner and drop cached instances."""
        if self._task_runner is not None:
            await self._task_runner.shutdown()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._blob_store = None
        self._model_provider = None
        self._embedding_client = None
        self._task_runner = None
        self._document_pipeline = None
        self._retriever = None
        self._answer_synthesizer = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DocumentService: Document service wired to the cached pipeline and runner
    """
    cache = get_service_cache()
    return DocumentService(
        db=db,
        blob_store=cache.blob_store,
        pipeline=cache.document_pipeline,
        task_runner=cache.task_runner,
        max_upload_bytes=cache.settings.storage.max_upload_bytes,
    )


def get_search_service(db: AsyncSession = Depends(get_async_db)) -> SearchService:
    """
    Get search service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SearchService: Search service with cached retriever and synthesizer
    """
    cache = get_service_cache()
    return SearchService(
        db=db,
        retriever=cache.retriever,
        synthesizer=cache.answer_synthesizer,
        excerpt_length=cache.settings.retrieval.excerpt_length,
    )
