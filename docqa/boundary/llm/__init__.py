"""
Model provider adapters.

Exports: ModelProvider, LangChainModelProvider, get_model_provider
"""

from docqa.configs.model_provider import ModelProviderSettings

from .base import ModelProvider
from .langchain_provider import LangChainModelProvider


def get_model_provider(settings: ModelProviderSettings) -> ModelProvider:
    """
    Build the model provider selected by configuration.

    API keys fall back to the provider's own environment variable
    (OPENAI_API_KEY / GOOGLE_API_KEY) when not configured here.

    Args:
        settings: Model provider settings ("openai" or "google")

    Returns:
        ModelProvider: Configured provider

    Raises:
        ValueError: Unknown provider
    """
    if settings.provider == "openai":
        from langchain_openai import ChatOpenAI, OpenAIEmbeddings

        credentials = {"api_key": settings.openai_api_key} if settings.openai_api_key else {}
        embeddings = OpenAIEmbeddings(
            model=settings.embedding_model,
            dimensions=settings.embedding_dimension,
            request_timeout=settings.request_timeout,
            **credentials,
        )

        def build_chat(temperature: float, max_tokens: int) -> ChatOpenAI:
            return ChatOpenAI(
                model=settings.chat_model,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=settings.request_timeout,
                **credentials,
            )

        return LangChainModelProvider(embeddings, build_chat)

    if settings.provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

        credentials = {"google_api_key": settings.google_api_key} if settings.google_api_key else {}
        embeddings = GoogleGenerativeAIEmbeddings(
            model=settings.embedding_model,
            **credentials,
        )

        def build_chat(temperature: float, max_tokens: int) -> ChatGoogleGenerativeAI:
            return ChatGoogleGenerativeAI(
                model=settings.chat_model,
                temperature=temperature,
                max_output_tokens=max_tokens,
                timeout=settings.request_timeout,
                **credentials,
            )

        return LangChainModelProvider(embeddings, build_chat)

    raise ValueError(f"Unknown model provider: {settings.provider}")


__all__ = ["ModelProvider", "LangChainModelProvider", "get_model_provider"]
