"""Abstract interfaces for infrastructure abstraction."""

from career_chat.interfaces.auth_provider import IAuthProvider, User
from career_chat.interfaces.chat_session_repository import IChatSessionRepository
from career_chat.interfaces.llm_provider import ILLMProvider
from career_chat.interfaces.rate_limit_repository import IRateLimitRepository
from career_chat.interfaces.session_store import ISessionStore

__all__ = [
    "IAuthProvider",
    "User",
    "IChatSessionRepository",
    "ILLMProvider",
    "IRateLimitRepository",
    "ISessionStore",
]
