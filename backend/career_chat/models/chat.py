"""
Chat model definitions.

Request/response models for the chat and session endpoints.
"""

from typing import Optional

from pydantic import Field

from career_chat.core.config import get_settings
from career_chat.models.chat_session import CamelModel, ChatMessage

settings = get_settings()


class SendMessageRequest(CamelModel):
    """Request model for sending a chat message."""

    content: str = Field(..., max_length=settings.MAX_MESSAGE_LENGTH, description="User message")
    session_id: Optional[str] = Field(None, max_length=100, description="Target session ID")


class RateLimitInfo(CamelModel):
    """Remaining guest quota after a charged message."""

    remaining: int


class SendMessageResponse(CamelModel):
    """Response model for a completed chat turn."""

    user_message: ChatMessage
    ai_message: ChatMessage
    session_id: str
    rate_limit_info: Optional[RateLimitInfo] = None


class RateLimitStatus(CamelModel):
    """Remaining guest quota (-1 means unlimited)."""

    remaining: int


class SuccessResponse(CamelModel):
    """Generic acknowledgement."""

    success: bool = True


class CreateSessionRequest(CamelModel):
    """Request model for creating a session."""

    title: Optional[str] = Field(None, max_length=200)


class ResponseTypeCounts(CamelModel):
    ai: int = 0
    common: int = 0
    redirect: int = 0
    total: int = 0


class ChatAnalytics(CamelModel):
    """Usage analytics over persisted messages."""

    total_messages: int
    anonymous_messages: int
    authenticated_messages: int
    response_types: ResponseTypeCounts
    categories: dict[str, int] = Field(default_factory=dict)
    catalogue: dict = Field(default_factory=dict, description="Canned response catalogue stats")
    common_response_rate: float = Field(0.0, description="Percent of replies served without the LLM")
    api_calls_saved: int = 0
