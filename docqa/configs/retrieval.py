"""
Retrieval and answer synthesis settings.

Similarity threshold, top-K cutoff, source excerpt length and the
completion parameters used for grounded answers.

Dependencies: pydantic, pydantic_settings
System role: Query path configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Configuration for similarity search and answer synthesis."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    match_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for a chunk to be returned",
    )
    top_k: int = Field(default=5, ge=1, description="Number of top results to retrieve")
    excerpt_length: int = Field(
        default=200,
        description="Characters of chunk content shown per cited source",
    )

    temperature: float = Field(default=0.3, description="Completion temperature")
    max_tokens: int = Field(default=1000, description="Completion token limit")

    response_language: str = Field(
        default="Dutch",
        description="Language the assistant answers in",
    )
    no_results_message: str = Field(
        default=(
            "Ik kon geen relevante informatie vinden in de geüploade "
            "documenten voor deze vraag."
        ),
        description="Canned answer when no chunk clears the threshold",
    )
    no_answer_message: str = Field(
        default="Geen antwoord gegenereerd.",
        description="Fallback when the provider returns empty content",
    )
