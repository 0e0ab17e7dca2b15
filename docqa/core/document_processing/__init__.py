"""
Document processing pipeline for ingestion.

Extracts text from uploaded documents, splits it into overlapping chunks,
embeds the chunks in bounded batches and stores them for retrieval.

Dependencies: pypdf, python-docx, pandas, tenacity, sqlalchemy, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .entrypoint import DocumentPipeline
from .models import Chunk, PipelineResult, TextSpan

__all__ = [
    "DocumentPipeline",
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "Chunk",
    "PipelineResult",
    "TextSpan",
]
