"""
Model provider interface.

Dependencies: abc
System role: Port for embedding and chat completion backends
"""

from abc import ABC, abstractmethod


class ModelProvider(ABC):
    """Embedding and completion capability consumed by the core."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Embed a text into a fixed-dimension vector."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Generate a chat completion.

        Args:
            system_prompt: Instruction turn
            user_prompt: User turn
            temperature: Sampling temperature
            max_tokens: Completion length limit

        Returns:
            str: Completion text (may be empty)
        """
