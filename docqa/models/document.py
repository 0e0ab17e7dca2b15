"""
Document domain models and schemas.

Request/response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from docqa.boundary.db.models.document_model import DocumentStatus
from docqa.core.file_types import FileType


class DocumentResponse(BaseModel):
    """Response schema for a single document."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    file_name: str
    file_type: FileType
    file_path: str
    file_size: int
    upload_date: datetime
    processed: bool
    status: DocumentStatus
    metadata: dict = Field(
        default_factory=dict,
        validation_alias=AliasChoices("doc_metadata", "metadata"),
    )


class DocumentListResponse(BaseModel):
    """Document list response, most recent upload first."""

    documents: list[DocumentResponse]
    total: int


class DocumentUploadResponse(BaseModel):
    """Upload acknowledgment returned before ingestion completes."""

    success: bool = True
    status: str = Field(default="processing", description="Ingestion state at response time")
    document: DocumentResponse
