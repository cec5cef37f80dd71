"""
Integration tests for ChatService.

Tests the service layer with real repositories but a fake LLM.
"""

import logging

import pytest

from career_chat.core.exceptions import (
    AuthenticationError,
    GenerationTimeoutError,
    RateLimitError,
    ValidationError,
)
from career_chat.models.chat_session import new_anonymous_session_id
from career_chat.models.identity import Identity
from career_chat.services.chat_service import ChatService
from career_chat.services.rate_limit_service import RateLimitService
from career_chat.services.response_generator import ResponseGenerator
from career_chat.services.session_service import SessionService

CAREER_QUESTION = "I am a software engineer thinking about my next move"
IP = "203.0.113.50"


def build_chat_service(chat_repo, rate_limit_repo, llm, settings, timeout_seconds=5.0):
    return ChatService(
        session_repo=chat_repo,
        rate_limit_service=RateLimitService(rate_limit_repo, settings),
        generator=ResponseGenerator(llm, timeout_seconds=timeout_seconds),
        settings=settings,
    )


@pytest.fixture
def chat_service(chat_repo, rate_limit_repo, fake_llm, settings):
    return build_chat_service(chat_repo, rate_limit_repo, fake_llm, settings)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_send_creates_session_lazily(chat_service, chat_repo, test_user_id):
    """Test that a first message without a session id opens one."""
    identity = Identity.for_user(test_user_id)

    result = await chat_service.send_message(identity, IP, None, "  resume tips  ")

    assert result.user_message.content == "resume tips"
    session = await chat_repo.get_session(test_user_id, result.session_id)
    assert session.message_count == 2


@pytest.mark.integration
@pytest.mark.asyncio
async def test_history_is_capped(chat_repo, rate_limit_repo, fake_llm, settings, test_user_id):
    """Test that only the configured number of prior messages reach the model."""
    limited = settings.model_copy(update={"HISTORY_CONTEXT_LIMIT": 2})
    service = build_chat_service(chat_repo, rate_limit_repo, fake_llm, limited)
    identity = Identity.for_user(test_user_id)

    first = await service.send_message(identity, IP, None, "resume tips")
    await service.send_message(identity, IP, first.session_id, "interview tips")
    await service.send_message(identity, IP, first.session_id, CAREER_QUESTION)

    history = fake_llm.calls[0]["history"]
    assert [turn["content"] for turn in history][0] == "interview tips"
    assert len(history) == 2


@pytest.mark.integration
@pytest.mark.asyncio
async def test_guest_with_anonymous_session(chat_service, rate_limit_repo):
    """Test that a guest turn on a client session is charged and echoed."""
    session_id = new_anonymous_session_id()

    result = await chat_service.send_message(Identity.anonymous(), IP, session_id, CAREER_QUESTION)

    assert result.session_id == session_id
    assert result.rate_limit_info.remaining == 2
    assert await rate_limit_repo.status(IP) == 2


@pytest.mark.integration
@pytest.mark.asyncio
async def test_authenticated_anonymous_session_is_not_charged(chat_service, rate_limit_repo, test_user_id):
    """Test that signed-in callers on a client session skip the quota."""
    result = await chat_service.send_message(
        Identity.for_user(test_user_id), IP, new_anonymous_session_id(), CAREER_QUESTION
    )

    assert result.rate_limit_info is None
    assert result.ai_message.is_anonymous is True
    assert await rate_limit_repo.status(IP) == 3


@pytest.mark.integration
@pytest.mark.asyncio
async def test_guest_on_database_session_is_rejected(chat_service, chat_repo, fake_llm, rate_limit_repo):
    """Test that guests cannot address persisted sessions."""
    session = await chat_repo.create_session("owner")

    with pytest.raises(AuthenticationError):
        await chat_service.send_message(Identity.anonymous(), IP, session.id, CAREER_QUESTION)
    assert fake_llm.calls == []
    assert await rate_limit_repo.status(IP) == 3


@pytest.mark.integration
@pytest.mark.asyncio
async def test_exhausted_guest_never_reaches_model(chat_service, fake_llm):
    """Test that quota is enforced before generation."""
    for _ in range(3):
        await chat_service.send_message(Identity.anonymous(), IP, None, CAREER_QUESTION)

    with pytest.raises(RateLimitError):
        await chat_service.send_message(Identity.anonymous(), IP, None, CAREER_QUESTION)
    assert len(fake_llm.calls) == 3


@pytest.mark.integration
@pytest.mark.asyncio
async def test_failed_guest_generation_still_costs_quota(
    chat_repo, rate_limit_repo, fake_llm, settings
):
    """Test that quota is charged even when the reply times out."""
    fake_llm.delay = 1.0
    service = build_chat_service(chat_repo, rate_limit_repo, fake_llm, settings, timeout_seconds=0.05)

    with pytest.raises(GenerationTimeoutError):
        await service.send_message(Identity.anonymous(), IP, None, CAREER_QUESTION)
    assert await rate_limit_repo.status(IP) == 2


@pytest.mark.integration
@pytest.mark.asyncio
async def test_validation_happens_first(chat_service, rate_limit_repo, settings):
    """Test that invalid content is rejected before any side effect."""
    with pytest.raises(ValidationError):
        await chat_service.send_message(Identity.anonymous(), IP, None, "\n\t ")
    with pytest.raises(ValidationError):
        await chat_service.send_message(
            Identity.anonymous(), IP, None, "x" * (settings.MAX_MESSAGE_LENGTH + 1)
        )
    assert await rate_limit_repo.status(IP) == 3


@pytest.mark.integration
@pytest.mark.asyncio
async def test_session_service_registry(chat_repo, test_user_id):
    """Test listing, creating and deleting through the registry."""
    service = SessionService(chat_repo)
    identity = Identity.for_user(test_user_id)

    created = await service.create_session(identity, "Offers")
    assert [s.id for s in await service.list_sessions(identity)] == [created.id]

    await service.delete_session(identity, created.id)
    await service.delete_session(identity, created.id)
    assert await service.list_sessions(identity) == []

    guest_session = await service.create_session(Identity.anonymous())
    assert guest_session.id.startswith("anon_session_")
    assert await service.list_sessions(Identity.anonymous()) == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_turn_log_carries_user_intent(chat_service, test_user_id, caplog):
    """Completed turns are logged with the keyword reading of the user's intent."""
    caplog.set_level(logging.INFO, logger="career_chat")

    await chat_service.send_message(
        Identity.for_user(test_user_id), IP, None, "Can you help me? I'm worried, this is urgent"
    )

    turn = next(r.getMessage() for r in caplog.records if "Chat turn completed" in r.getMessage())
    assert "intent=request" in turn
    assert "urgency=high" in turn
    assert "mood=negative" in turn
