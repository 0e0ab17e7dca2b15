"""
Chunk domain model for document processing pipeline.

Represents a chunk draft with its position in the document, its location
within the source (page or sheet), metadata, and embedding.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Document chunk with optional embedding vector."""

    content: str = Field(description="Trimmed chunk text content")
    chunk_index: int = Field(ge=0, description="0-based contiguous position within the document")
    page_number: int | None = Field(default=None, description="PDF page containing the chunk start")
    sheet_name: str | None = Field(default=None, description="Excel sheet the chunk came from")
    metadata: dict = Field(default_factory=dict, description="chunk_size and total_chunks")
    embedding: list[float] | None = Field(default=None, description="Embedding vector")
