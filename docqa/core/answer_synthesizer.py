"""
Answer synthesis from retrieved context.

Builds a grounded prompt from chunk texts and asks the model provider
for a completion. With no context it answers with a canned message and
makes no provider call.

Dependencies: docqa.boundary.llm, docqa.configs
System role: Final stage of the question answering path
"""

import logging

from docqa.boundary.llm import ModelProvider
from docqa.configs.retrieval import RetrievalSettings
from docqa.core.answer_prompt import CONTEXT_SEPARATOR, SYSTEM_PROMPT, USER_PROMPT

logger = logging.getLogger(__name__)


class AnswerSynthesizer:
    """Generate context-grounded answers."""

    def __init__(self, provider: ModelProvider, settings: RetrievalSettings) -> None:
        """
        Initialize synthesizer.

        Args:
            provider: Completion backend
            settings: Temperature, token limit, language and canned messages
        """
        self._provider = provider
        self._settings = settings

    def build_prompts(self, query: str, context_chunks: list[str]) -> tuple[str, str]:
        """
        Build system and user prompts.

        Returns:
            tuple[str, str]: (system_prompt, user_prompt)
        """
        context = CONTEXT_SEPARATOR.join(context_chunks)
        system_prompt = SYSTEM_PROMPT.format(language=self._settings.response_language)
        user_prompt = USER_PROMPT.format(context=context, question=query)
        return system_prompt, user_prompt

    async def answer(self, query: str, context_chunks: list[str]) -> str:
        """
        Answer a question from retrieved chunks.

        Args:
            query: User question, passed through literally
            context_chunks: Retrieved chunk texts, best match first

        Returns:
            str: Model answer, or a canned message for empty context / empty completion
        """
        if not context_chunks:
            logger.info(f"{__name__}:answer - No context, returning canned response")
            return self._settings.no_results_message

        system_prompt, user_prompt = self.build_prompts(query, context_chunks)
        completion = await self._provider.complete(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_tokens,
        )

        if not completion or not completion.strip():
            logger.warning(f"{__name__}:answer - Provider returned empty completion")
            return self._settings.no_answer_message
        return completion
