"""
Search domain models and schemas.

Transient similarity-search rows plus request/response schemas for the
question answering endpoint.

Dependencies: pydantic
System role: Search API contracts
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from docqa.core.file_types import FileType
from docqa.models.citation import Citation


class SearchResult(BaseModel):
    """Chunk joined with its similarity score and owning document fields."""

    id: uuid.UUID = Field(description="Chunk identifier")
    document_id: uuid.UUID = Field(description="Owning document identifier")
    content: str = Field(description="Chunk text content")
    similarity: float = Field(description="Cosine similarity to the query (0.0-1.0)")
    file_name: str = Field(description="Owning document filename")
    file_type: FileType = Field(description="Owning document format")
    chunk_index: int = Field(default=0, description="Position within the document")
    page_number: int | None = Field(default=None, description="Source page (PDF)")
    sheet_name: str | None = Field(default=None, description="Source sheet (Excel)")


class SearchRequest(BaseModel):
    """Request schema for a question over the uploaded documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    query: str = Field(description="Natural-language question")
    file_type: FileType | None = Field(
        default=None,
        description="Restrict retrieval to documents of this format",
    )


class SearchResponse(BaseModel):
    """Grounded answer with the sources it was built from."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    answer: str
    sources: list[Citation] = Field(default_factory=list)
