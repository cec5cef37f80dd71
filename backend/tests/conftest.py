"""
Shared fixtures.

Repositories run against a temporary SQLite file so concurrent transactions
behave as they do in production. The language model is always faked.
"""

import asyncio
from datetime import timedelta
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from career_chat.api.deps import (
    get_auth_provider,
    get_chat_session_repository,
    get_llm_provider,
    get_rate_limit_repository,
)
from career_chat.core.config import Settings, get_settings
from career_chat.infrastructure.local.chat_session_repository import SqliteChatSessionRepository
from career_chat.infrastructure.local.database import Base
from career_chat.infrastructure.local.mock_auth import MockAuthProvider
from career_chat.infrastructure.local.rate_limit_repository import SqlRateLimitRepository
from career_chat.interfaces.llm_provider import ILLMProvider

AI_REPLY = "Here is some tailored advice for your situation."


class FakeLLMProvider(ILLMProvider):
    """Records every call; can be told to fail or stall."""

    def __init__(
        self,
        reply: str = AI_REPLY,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: list[dict] = []

    async def generate(self, message, history=(), system_instruction=None) -> str:
        self.calls.append(
            {
                "message": message,
                "history": list(history),
                "system_instruction": system_instruction,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply

    def get_model_name(self) -> str:
        return "fake-model"


@pytest.fixture
def settings():
    """Test settings, isolated from any local .env file."""
    return Settings(
        _env_file=None,
        APP_ENV="test",
        ANONYMOUS_REQUEST_LIMIT=3,
        RATE_LIMIT_WINDOW_HOURS=24,
        GEMINI_API_KEY="",
        TRUST_PROXY_HEADERS=True,
    )


@pytest.fixture
def fake_llm():
    return FakeLLMProvider()


@pytest.fixture
def test_user_id():
    return "test_user"


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'career_chat_test.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def chat_repo(session_factory):
    return SqliteChatSessionRepository(session_factory=session_factory)


@pytest.fixture
def rate_limit_repo(session_factory, settings):
    return SqlRateLimitRepository(
        session_factory=session_factory,
        limit=settings.ANONYMOUS_REQUEST_LIMIT,
        window=timedelta(hours=settings.RATE_LIMIT_WINDOW_HOURS),
    )


@pytest.fixture
def app(chat_repo, rate_limit_repo, fake_llm, settings):
    """Application wired to the test database and the fake model."""
    from main import create_app

    application = create_app()
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_chat_session_repository] = lambda: chat_repo
    application.dependency_overrides[get_rate_limit_repository] = lambda: rate_limit_repo
    application.dependency_overrides[get_llm_provider] = lambda: fake_llm
    application.dependency_overrides[get_auth_provider] = lambda: MockAuthProvider(enabled=True)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
