"""
Gemini API provider.

Uses Gemini API with API Key (no GCP project required).
"""

from __future__ import annotations

from typing import Optional, Sequence

from google import genai
from google.genai.types import Content, GenerateContentConfig, Part

from career_chat.core.config import Settings, get_settings
from career_chat.core.exceptions import GenerationConfigError, GenerationError
from career_chat.core.logger import logger
from career_chat.interfaces.llm_provider import ILLMProvider

# Gemini names the assistant side of a conversation "model"
_ROLE_MAP = {"user": "user", "assistant": "model"}


def to_gemini_contents(history: Sequence[dict[str, str]], message: str) -> list[Content]:
    """Build the Gemini conversation: prior turns, then the new user message."""
    contents = [
        Content(role=_ROLE_MAP.get(turn["role"], "user"), parts=[Part(text=turn["content"])])
        for turn in history
        if turn.get("content")
    ]
    contents.append(Content(role="user", parts=[Part(text=message)]))
    return contents


class GeminiAPIProvider(ILLMProvider):
    """Gemini API provider using an API key."""

    def __init__(self, model_name: Optional[str] = None, settings: Optional[Settings] = None):
        """
        Initialize Gemini API provider.

        The credential is not required up front: requests that never reach
        the model (canned answers) must work without one.

        Args:
            model_name: Gemini model name (e.g., "gemini-2.0-flash")
            settings: Settings override
        """
        self._settings = settings or get_settings()
        self._model_name = model_name or self._settings.GEMINI_MODEL
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if not self._settings.has_gemini_credentials:
            raise GenerationConfigError(
                "The AI service is not configured. Please contact support.",
                details={"missing": "GEMINI_API_KEY"},
            )
        if self._client is None:
            self._client = genai.Client(api_key=self._settings.GEMINI_API_KEY)
        return self._client

    def get_model_name(self) -> str:
        """Get human-readable model name."""
        return f"Gemini API ({self._model_name})"

    async def generate(
        self,
        message: str,
        history: Sequence[dict[str, str]] = (),
        system_instruction: Optional[str] = None,
    ) -> str:
        client = self._get_client()

        config_kwargs: dict = {
            "temperature": self._settings.GENERATION_TEMPERATURE,
            "max_output_tokens": self._settings.GENERATION_MAX_OUTPUT_TOKENS,
            "top_p": 0.8,
            "top_k": 40,
        }
        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction

        try:
            response = await client.aio.models.generate_content(
                model=self._model_name,
                contents=to_gemini_contents(history, message),
                config=GenerateContentConfig(**config_kwargs),
            )
        except Exception as exc:
            logger.warning(f"GenAI request failed: {exc}")
            raise GenerationError(
                "The AI service failed to respond. Please try again.",
                details={"model": self._model_name},
            ) from exc

        text = (response.text or "").strip()
        if not text:
            raise GenerationError(
                "The AI service returned an empty response. Please try again.",
                details={"model": self._model_name},
            )
        return text
