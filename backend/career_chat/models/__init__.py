"""Pydantic models (schemas) for the application."""

from career_chat.models.enums import MessageRole, ResponseKind, StoreAction
from career_chat.models.chat_session import (
    ChatMessage,
    ChatSession,
    is_anonymous_session,
    new_anonymous_session_id,
)
from career_chat.models.identity import Identity
from career_chat.models.rate_limit import (
    UNLIMITED_REMAINING,
    RateLimitCharge,
    RateLimitCheck,
)

__all__ = [
    # Enums
    "MessageRole",
    "ResponseKind",
    "StoreAction",
    # Sessions
    "ChatSession",
    "ChatMessage",
    "is_anonymous_session",
    "new_anonymous_session_id",
    # Identity
    "Identity",
    # Rate limit
    "UNLIMITED_REMAINING",
    "RateLimitCharge",
    "RateLimitCheck",
]
