"""
Citation domain model.

Represents a cited source chunk returned alongside a grounded answer.

Dependencies: pydantic
System role: Citation data structure
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Citation(BaseModel):
    """Citation model for source attribution."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID = Field(description="Chunk identifier")
    document_id: uuid.UUID = Field(description="Source document identifier")
    file_name: str = Field(description="Source document filename")
    file_type: str = Field(description="Source document format")
    content: str = Field(description="Truncated chunk excerpt")
    similarity: float = Field(description="Similarity score (0.0-1.0)")
    page_number: int | None = Field(default=None, description="Page number in source")
    sheet_name: str | None = Field(default=None, description="Sheet name in source")
