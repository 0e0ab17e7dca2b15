"""
API test fixtures.

Provides a TestClient over a fresh application with service dependencies
overridden by mocks. The lifespan is not entered, so no real clients are
built.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from docqa.api.deps import get_document_service, get_search_service
from docqa.api.main import create_app
from docqa.application.services.document_service import DocumentService
from docqa.application.services.search_service import SearchService
from docqa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docqa.core.file_types import FileType


@pytest.fixture
def document_service() -> MagicMock:
    """DocumentService mock with async methods."""
    return MagicMock(spec=DocumentService)


@pytest.fixture
def search_service() -> MagicMock:
    """SearchService mock with async methods."""
    return MagicMock(spec=SearchService)


@pytest.fixture
def app(document_service, search_service):
    """Application with service dependencies overridden."""
    application = create_app()
    application.dependency_overrides[get_document_service] = lambda: document_service
    application.dependency_overrides[get_search_service] = lambda: search_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Test client without lifespan."""
    return TestClient(app)


@pytest.fixture
def make_document():
    """Factory for unsaved DocumentModel instances."""

    def _make(**overrides) -> DocumentModel:
        values = {
            "id": uuid.uuid4(),
            "title": "rapport",
            "file_name": "rapport.pdf",
            "file_type": FileType.PDF,
            "file_path": "1700000000000-rapport.pdf",
            "file_size": 2048,
            "upload_date": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            "processed": False,
            "status": DocumentStatus.UPLOADED,
            "doc_metadata": {"content_type": "application/pdf"},
        }
        values.update(overrides)
        return DocumentModel(**values)

    return _make
