"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Document ORM model and status enum
  - ChunkModel: Embedded chunk ORM model

Dependencies: sqlalchemy, pgvector, docqa.boundary.db.base
System role: Database model definitions for domain entities
"""

from docqa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docqa.boundary.db.models.chunk_model import ChunkModel

__all__ = [
    "DocumentModel",
    "DocumentStatus",
    "ChunkModel",
]
