"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from docqa.core.exceptions import (
    DocQAException,
    ValidationError,
    DocumentNotFoundError,
    DocumentProcessingError,
    ExtractionError,
    EmbeddingError,
    StorageError,
)

__all__ = [
    "DocQAException",
    "ValidationError",
    "DocumentNotFoundError",
    "DocumentProcessingError",
    "ExtractionError",
    "EmbeddingError",
    "StorageError",
]
