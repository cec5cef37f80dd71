"""
Session store interface.

A session store is the persistence path chosen for a request: database rows
for authenticated users, or client-held storage for anonymous guests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from career_chat.models.chat_session import ChatMessage, ChatSession
from career_chat.models.response import GeneratedResponse


class ISessionStore(ABC):
    """Abstract interface for the per-request session persistence path."""

    #: True when the server never persists what this store handles
    ephemeral: bool = False

    @abstractmethod
    async def list_sessions(self) -> list[ChatSession]:
        """List sessions visible to the caller."""
        pass

    @abstractmethod
    async def create_session(self, title: Optional[str] = None) -> ChatSession:
        """Create a session and return its descriptor."""
        pass

    @abstractmethod
    async def delete_session(self, session_id: str) -> bool:
        """Delete a session; returns False when nothing was deleted."""
        pass

    @abstractmethod
    async def list_messages(self, session_id: str) -> list[ChatMessage]:
        """List all messages for a session, oldest first."""
        pass

    @abstractmethod
    async def load_history(self, session_id: str, limit: int) -> list[dict[str, str]]:
        """
        Conversation context for the generator.

        Returns:
            Up to ``limit`` prior turns, oldest first, as role/content dicts

        Raises:
            NotFoundError: If the session does not exist for the caller
        """
        pass

    @abstractmethod
    async def record_exchange(
        self,
        session_id: str,
        user_content: str,
        reply: GeneratedResponse,
        title: Optional[str] = None,
    ) -> tuple[ChatMessage, ChatMessage]:
        """
        Persist or echo one user/assistant turn.

        Returns:
            (user message, assistant message)
        """
        pass
