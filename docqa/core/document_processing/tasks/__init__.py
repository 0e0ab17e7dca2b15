"""
Task modules for document processing pipeline.

Exports: ExtractionTask, ChunkingTask, EmbeddingClient, SavingTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingClient
from .extraction_task import ExtractionTask
from .saving_task import SavingTask

__all__ = [
    "ExtractionTask",
    "ChunkingTask",
    "EmbeddingClient",
    "SavingTask",
]
