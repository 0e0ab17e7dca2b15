"""
Models for document processing pipeline.

Exports: Chunk, TextSpan, PipelineResult
"""

from .chunk import Chunk
from .pipeline_result import PipelineResult
from .text_span import TextSpan

__all__ = [
    "Chunk",
    "PipelineResult",
    "TextSpan",
]
