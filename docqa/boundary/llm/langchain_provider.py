"""
LangChain-backed model provider.

Adapts any LangChain Embeddings implementation and chat model factory to
the ModelProvider interface. Chat models are built lazily per
(temperature, max_tokens) pair and reused.

Dependencies: langchain_core
System role: ModelProvider adapter shared by OpenAI and Google backends
"""

import logging
from typing import Callable

from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from .base import ModelProvider

logger = logging.getLogger(__name__)

ChatModelBuilder = Callable[[float, int], BaseChatModel]


class LangChainModelProvider(ModelProvider):
    """ModelProvider over LangChain embeddings and chat models."""

    def __init__(self, embeddings: Embeddings, chat_model_builder: ChatModelBuilder) -> None:
        """
        Initialize provider.

        Args:
            embeddings: LangChain embeddings client
            chat_model_builder: Builds a chat model for (temperature, max_tokens)
        """
        self._embeddings = embeddings
        self._chat_model_builder = chat_model_builder
        self._chat_models: dict[tuple[float, int], BaseChatModel] = {}

    async def embed(self, text: str) -> list[float]:
        return await self._embeddings.aembed_query(text)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        model = self._get_chat_model(temperature, max_tokens)
        response = await model.ainvoke(
            [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        )
        return self._content_text(response.content)

    def _get_chat_model(self, temperature: float, max_tokens: int) -> BaseChatModel:
        key = (temperature, max_tokens)
        if key not in self._chat_models:
            self._chat_models[key] = self._chat_model_builder(temperature, max_tokens)
        return self._chat_models[key]

    @staticmethod
    def _content_text(content) -> str:
        """Flatten message content (string or list of content blocks)."""
        if isinstance(content, str):
            return content
        parts = []
        for block in content or []:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
