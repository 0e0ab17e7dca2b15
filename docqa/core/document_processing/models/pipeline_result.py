"""
Pipeline result model for document processing.

Represents the outcome of processing a document through the pipeline.

Dependencies: pydantic
System role: Return type for DocumentPipeline.run()
"""

from pydantic import BaseModel, Field

from docqa.boundary.db.models.document_model import DocumentStatus


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    document_id: str = Field(description="Unique document identifier")
    status: DocumentStatus = Field(description="Terminal status reached by the run")
    chunk_count: int = Field(default=0, description="Number of chunks persisted")
    error: str | None = Field(default=None, description="Failure message when status is failed")
    processing_time_ms: float = Field(default=0.0, description="Total processing time in milliseconds")
