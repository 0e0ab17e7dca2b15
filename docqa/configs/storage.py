"""
Blob storage configuration.

Settings for raw document storage: local filesystem for development,
S3 bucket for production.

Dependencies: pydantic_settings
System role: Raw document storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for raw document blob storage."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="local",
        description="Blob store type: 'local' for filesystem, 's3' for production",
    )
    local_path: str = Field(
        default="./data/documents",
        description="Root directory for the local blob store",
    )
    bucket: str = Field(
        default="docqa-documents",
        description="S3 bucket for raw document storage",
    )
    region: str = Field(
        default="eu-west-1",
        description="AWS region for S3 bucket",
    )
    max_upload_bytes: int = Field(
        default=50 * 1024 * 1024,
        description="Largest accepted upload in bytes",
    )
