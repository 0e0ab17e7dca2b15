"""
Configuration settings for document ingestion pipeline.

Provides environment-based configuration for chunking, embedding batching
and concurrency.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=3000,
        gt=0,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=150,
        ge=0,
        description="Overlap between consecutive chunks in characters",
    )
    min_chunk_length: int = Field(
        default=50,
        ge=1,
        description="Chunks shorter than this after trimming are dropped",
    )

    # Embedding settings
    batch_size: int = Field(
        default=5,
        ge=1,
        description="Chunks embedded and inserted per batch",
    )
    embedding_concurrency: int = Field(
        default=5,
        ge=1,
        description="Maximum embedding calls in flight",
    )
    embedding_max_attempts: int = Field(
        default=1,
        ge=1,
        description="Attempts per embedding call (1 disables retry)",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "DocumentPipelineSettings":
        """Overlap must stay strictly below chunk size."""
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
