"""
Unit tests for the response generator.
"""

import pytest

from career_chat.core.config import Settings
from career_chat.core.exceptions import (
    GenerationConfigError,
    GenerationError,
    GenerationTimeoutError,
)
from career_chat.infrastructure.local.gemini_api_provider import GeminiAPIProvider, to_gemini_contents
from career_chat.models.enums import ResponseKind
from career_chat.services.response_generator import (
    AI_CATEGORY,
    CAREER_COUNSELOR_SYSTEM_PROMPT,
    ResponseGenerator,
)

CAREER_QUESTION = "I am a software engineer thinking about my next move"


@pytest.mark.asyncio
async def test_common_question_skips_model(fake_llm):
    """Catalogue answers never reach the model."""
    reply = await ResponseGenerator(fake_llm).generate("resume tips")

    assert reply.kind == ResponseKind.COMMON
    assert reply.category == "resume"
    assert fake_llm.calls == []


@pytest.mark.asyncio
async def test_off_topic_gets_redirect(fake_llm):
    """Non-career questions get the canned redirect."""
    reply = await ResponseGenerator(fake_llm).generate("Tell me a joke about cats")

    assert reply.kind == ResponseKind.REDIRECT
    assert reply.category is None
    assert fake_llm.calls == []


@pytest.mark.asyncio
async def test_career_question_uses_model_with_history(fake_llm):
    """Other career questions go to the model with prior turns and the system prompt."""
    history = [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
    ]
    reply = await ResponseGenerator(fake_llm).generate(CAREER_QUESTION, history)

    assert reply.kind == ResponseKind.AI
    assert reply.category == AI_CATEGORY
    assert reply.text == fake_llm.reply
    assert fake_llm.calls == [
        {
            "message": CAREER_QUESTION,
            "history": history,
            "system_instruction": CAREER_COUNSELOR_SYSTEM_PROMPT,
        }
    ]


@pytest.mark.asyncio
async def test_slow_model_times_out(fake_llm):
    """A model slower than the timeout fails with a timeout error."""
    fake_llm.delay = 1.0
    generator = ResponseGenerator(fake_llm, timeout_seconds=0.05)

    with pytest.raises(GenerationTimeoutError):
        await generator.generate(CAREER_QUESTION)


@pytest.mark.asyncio
async def test_unexpected_model_error_is_wrapped(fake_llm):
    """Arbitrary provider failures surface as generation errors."""
    fake_llm.error = RuntimeError("boom")

    with pytest.raises(GenerationError) as exc_info:
        await ResponseGenerator(fake_llm).generate(CAREER_QUESTION)
    assert exc_info.value.kind == "generation_failed"


@pytest.mark.asyncio
async def test_gemini_without_key_is_unconfigured():
    """The Gemini provider refuses to run without a credential."""
    provider = GeminiAPIProvider(settings=Settings(_env_file=None, GEMINI_API_KEY=""))

    with pytest.raises(GenerationConfigError):
        await ResponseGenerator(provider).generate(CAREER_QUESTION)


@pytest.mark.asyncio
async def test_gemini_without_key_still_serves_catalogue():
    """Canned answers work even when the model is not configured."""
    provider = GeminiAPIProvider(settings=Settings(_env_file=None, GEMINI_API_KEY=""))

    reply = await ResponseGenerator(provider).generate("interview tips")
    assert reply.kind == ResponseKind.COMMON


def test_to_gemini_contents_maps_roles():
    contents = to_gemini_contents(
        [{"role": "user", "content": "a"}, {"role": "assistant", "content": "b"}],
        "c",
    )
    assert [content.role for content in contents] == ["user", "model", "user"]
    assert [content.parts[0].text for content in contents] == ["a", "b", "c"]
