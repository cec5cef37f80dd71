"""
Chat session and message models.

Authenticated sessions are persisted server-side; anonymous sessions live only
in the browser and are recognised by their identifier prefix.
"""

import time
from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from career_chat.models.enums import MessageRole, ResponseKind

DEFAULT_SESSION_TITLE = "New Chat"
ANONYMOUS_SESSION_PREFIX = "anon_session_"


def _random_suffix() -> str:
    return uuid4().hex[:9]


def new_anonymous_session_id() -> str:
    """Create a client-side session id that cannot collide with database ids."""
    return f"{ANONYMOUS_SESSION_PREFIX}{int(time.time() * 1000)}_{_random_suffix()}"


def new_temporary_message_id(tag: str) -> str:
    """Id for a message echoed to a guest; unique even within one millisecond."""
    return f"temp_{tag}_{int(time.time() * 1000)}_{_random_suffix()}"


def is_anonymous_session(session_id: str) -> bool:
    """Check if a session id follows the anonymous naming convention."""
    return session_id.startswith(ANONYMOUS_SESSION_PREFIX)


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatSession(CamelModel):
    """Chat session model."""

    id: str = Field(..., max_length=100, description="Chat session ID")
    title: str = Field(DEFAULT_SESSION_TITLE, max_length=200, description="Session title")
    created_at: datetime
    updated_at: datetime
    message_count: int = Field(0, ge=0, description="Messages in the session")
    user_id: Optional[str] = Field(None, exclude=True, description="Owner user ID")


class ChatMessage(CamelModel):
    """Chat message model."""

    id: str
    session_id: str = Field(..., max_length=100, description="Chat session ID")
    role: MessageRole
    content: str
    timestamp: datetime
    is_anonymous: bool = False
    response_type: Optional[ResponseKind] = None
    category: Optional[str] = None
