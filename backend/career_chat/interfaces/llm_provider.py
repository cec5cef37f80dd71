"""
LLM provider interface.

Defines the contract for generative text access.
Implementations: Gemini API.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class ILLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    async def generate(
        self,
        message: str,
        history: Sequence[dict[str, str]] = (),
        system_instruction: Optional[str] = None,
    ) -> str:
        """
        Generate a reply to ``message`` given prior turns.

        Args:
            message: Latest user message
            history: Prior turns as {"role": "user"|"assistant", "content": str}, oldest first
            system_instruction: Optional system prompt

        Returns:
            Reply text

        Raises:
            GenerationConfigError: If the provider has no credential
            GenerationError: If the provider call fails
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable model name.

        Returns:
            Model name string for logging/display
        """
        pass
