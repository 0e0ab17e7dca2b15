"""
Model provider configuration settings.

Selects the embedding/completion backend and its model identifiers.
Embedding dimension must match the pgvector column of the chunk table.

Dependencies: pydantic, pydantic_settings
System role: Embedding and completion provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelProviderSettings(BaseSettings):
    """Embedding and chat model configuration (OpenAI or Google Gemini)."""

    model_config = SettingsConfigDict(
        env_prefix="MODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="Model provider: 'openai' or 'google'",
    )
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (text-embedding-3-small = 1536)",
    )
    chat_model: str = Field(
        default="gpt-4-turbo-preview",
        description="Chat completion model ID",
    )
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key (falls back to OPENAI_API_KEY when unset)",
    )
    google_api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY when unset)",
    )
    request_timeout: float = Field(
        default=60.0,
        description="Provider request timeout in seconds",
    )
