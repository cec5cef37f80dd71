"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request

from career_chat.core.config import Settings, get_settings
from career_chat.core.exceptions import ConfigurationError
from career_chat.interfaces.auth_provider import IAuthProvider
from career_chat.interfaces.chat_session_repository import IChatSessionRepository
from career_chat.interfaces.llm_provider import ILLMProvider
from career_chat.interfaces.rate_limit_repository import IRateLimitRepository
from career_chat.models.identity import Identity
from career_chat.services.chat_service import ChatService
from career_chat.services.identity import IdentityResolver
from career_chat.services.rate_limit_service import RateLimitService
from career_chat.services.response_generator import ResponseGenerator
from career_chat.services.session_service import SessionService

UNKNOWN_CLIENT_IP = "unknown"


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_chat_session_repository() -> IChatSessionRepository:
    """Get chat session repository instance."""
    from career_chat.infrastructure.local.chat_session_repository import (
        SqliteChatSessionRepository,
    )

    return SqliteChatSessionRepository()


@lru_cache()
def get_rate_limit_repository() -> IRateLimitRepository:
    """Get guest quota repository instance."""
    from career_chat.infrastructure.local.rate_limit_repository import SqlRateLimitRepository

    return SqlRateLimitRepository()


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_llm_provider() -> ILLMProvider:
    """Get LLM provider instance."""
    from career_chat.infrastructure.local.gemini_api_provider import GeminiAPIProvider

    return GeminiAPIProvider()


def create_auth_provider(settings: Settings) -> IAuthProvider:
    """
    Build the authentication provider named by AUTH_PROVIDER.

    Raises:
        ConfigurationError: The mock provider was requested in production
    """
    if settings.AUTH_PROVIDER == "local":
        from career_chat.infrastructure.auth.local_auth import LocalAuthProvider

        return LocalAuthProvider(settings)

    if settings.is_production:
        raise ConfigurationError(
            "AUTH_PROVIDER=mock accepts any bearer token and cannot run in production; "
            "set AUTH_PROVIDER=local"
        )

    from career_chat.infrastructure.local.mock_auth import MockAuthProvider

    return MockAuthProvider(enabled=True)


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get authentication provider based on AUTH_PROVIDER."""
    return create_auth_provider(get_settings())


# ===========================================
# Service Dependencies
# ===========================================


def get_identity_resolver(
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> IdentityResolver:
    return IdentityResolver(auth_provider)


def get_rate_limit_service(
    repo: IRateLimitRepository = Depends(get_rate_limit_repository),
    settings: Settings = Depends(get_settings),
) -> RateLimitService:
    return RateLimitService(repo, settings)


def get_response_generator(
    llm_provider: ILLMProvider = Depends(get_llm_provider),
    settings: Settings = Depends(get_settings),
) -> ResponseGenerator:
    return ResponseGenerator(llm_provider, timeout_seconds=settings.GENERATION_TIMEOUT_SECONDS)


def get_chat_service(
    session_repo: IChatSessionRepository = Depends(get_chat_session_repository),
    rate_limit_service: RateLimitService = Depends(get_rate_limit_service),
    generator: ResponseGenerator = Depends(get_response_generator),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    return ChatService(session_repo, rate_limit_service, generator, settings)


def get_session_service(
    session_repo: IChatSessionRepository = Depends(get_chat_session_repository),
) -> SessionService:
    return SessionService(session_repo)


# ===========================================
# Request Context
# ===========================================


async def get_current_identity(
    authorization: Annotated[str | None, Header()] = None,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Identity:
    """
    Resolve the caller.

    No Authorization header means an anonymous guest.
    """
    return await resolver.resolve(authorization)


def get_client_ip(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str:
    """Client IP: proxy headers when trusted (X-Forwarded-For, X-Real-IP), else the socket peer."""
    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first_hop = forwarded.split(",")[0].strip()
            if first_hop:
                return first_hop
        real_ip = request.headers.get("x-real-ip")
        if real_ip and real_ip.strip():
            return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT_IP


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
ClientIP = Annotated[str, Depends(get_client_ip)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
