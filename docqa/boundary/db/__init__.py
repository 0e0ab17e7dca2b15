"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentModel, ChunkModel: Core domain entities
  - DocumentStatus: Ingestion state enum
  - document_crud, chunk_crud: CRUD operation singletons

Dependencies: sqlalchemy, pgvector, docqa.configs
System role: Database adapter providing persistent storage for documents
and their embedded chunks, including the similarity search query.
"""

from docqa.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docqa.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docqa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docqa.boundary.db.models.chunk_model import ChunkModel
from docqa.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    ChunkCRUD,
    document_crud,
    chunk_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "DocumentStatus",
    "ChunkModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentCRUD",
    "ChunkCRUD",
    # CRUD singletons
    "document_crud",
    "chunk_crud",
]
