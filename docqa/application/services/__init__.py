"""Service orchestrators."""

from .document_service import DocumentService
from .ingestion_runner import IngestionTaskRunner
from .search_service import SearchService

__all__ = [
    "DocumentService",
    "IngestionTaskRunner",
    "SearchService",
]
