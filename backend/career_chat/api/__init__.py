"""API routers."""

from career_chat.api import chat, sessions

__all__ = [
    "chat",
    "sessions",
]
