"""
Assistant reply generation.

Canned answers are served first; the language model is called only when the
classifier cannot answer.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Sequence

from career_chat.core.exceptions import GenerationError, GenerationTimeoutError
from career_chat.core.logger import logger
from career_chat.interfaces.llm_provider import ILLMProvider
from career_chat.models.enums import ResponseKind
from career_chat.models.response import Classification, GeneratedResponse
from career_chat.services.career_responses import classify

AI_CATEGORY = "custom"

CAREER_COUNSELOR_SYSTEM_PROMPT = """You are a professional career counselor. Your role is to provide helpful, accurate, and supportive career advice.

IMPORTANT GUIDELINES:
- ONLY respond to career-related questions (job search, career development, skills, education, workplace issues, salary negotiation, interviews, resume, professional growth, etc.)
- For non-career questions, politely redirect: "I'm a career counselor AI. I can help with job search, career development, skills, interviews, resumes, and workplace guidance. How can I assist with your career goals?"
- Be supportive, professional, and encouraging
- Provide actionable advice with specific steps
- Ask follow-up questions to better understand their situation
- Keep responses concise but comprehensive (2-4 paragraphs max)

CAREER TOPICS I CAN HELP WITH:
- Job searching and applications
- Resume and cover letter writing
- Interview preparation and tips
- Career transitions and changes
- Skill development and training
- Salary negotiation
- Workplace challenges and conflicts
- Professional networking
- Career planning and goal setting
- Industry insights and trends
- Work-life balance
- Professional development
- Education and certification guidance"""


class ResponseGenerator:
    """Classifier first, language model as fallback."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        timeout_seconds: float = 30.0,
        classifier: Callable[[str], Classification] = classify,
        system_prompt: str = CAREER_COUNSELOR_SYSTEM_PROMPT,
    ):
        self._llm_provider = llm_provider
        self._timeout_seconds = timeout_seconds
        self._classifier = classifier
        self._system_prompt = system_prompt

    async def generate(
        self,
        content: str,
        history: Sequence[dict[str, str]] = (),
    ) -> GeneratedResponse:
        """
        Produce the assistant reply for one user message.

        Raises:
            GenerationConfigError: The model is needed but has no credential
            GenerationTimeoutError: The model did not answer in time
            GenerationError: The model call failed
        """
        classification = self._classifier(content)
        if classification.is_common:
            kind = ResponseKind.COMMON if classification.category else ResponseKind.REDIRECT
            return GeneratedResponse(
                text=classification.text,
                kind=kind,
                category=classification.category,
            )

        text = await self._call_model(content, history)
        return GeneratedResponse(text=text, kind=ResponseKind.AI, category=AI_CATEGORY)

    async def _call_model(self, content: str, history: Sequence[dict[str, str]]) -> str:
        model_name = self._llm_provider.get_model_name()
        try:
            return await asyncio.wait_for(
                self._llm_provider.generate(
                    content,
                    history=history,
                    system_instruction=self._system_prompt,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            logger.warning(f"{model_name} timed out after {self._timeout_seconds}s")
            raise GenerationTimeoutError(
                "The AI service took too long to respond. Please try again.",
                details={"timeout_seconds": self._timeout_seconds},
            ) from exc
        except GenerationError:
            raise
        except Exception as exc:
            logger.warning(f"{model_name} failed: {exc}")
            raise GenerationError(
                "Failed to generate a response. Please try again.",
            ) from exc

    @property
    def model_name(self) -> Optional[str]:
        return self._llm_provider.get_model_name()
