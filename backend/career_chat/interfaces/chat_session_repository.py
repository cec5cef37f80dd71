"""
Chat session repository interface.

Defines the contract for authenticated chat history persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from career_chat.models.chat_session import ChatMessage, ChatSession
from career_chat.models.enums import ResponseKind


class IChatSessionRepository(ABC):
    """Abstract interface for chat session persistence."""

    @abstractmethod
    async def create_session(self, user_id: str, title: Optional[str] = None) -> ChatSession:
        """
        Create a chat session owned by a user.

        Args:
            user_id: Owner user ID
            title: Optional session title

        Returns:
            ChatSession with a zero message count
        """
        pass

    @abstractmethod
    async def get_session(self, user_id: str, session_id: str) -> Optional[ChatSession]:
        """
        Get a session if it exists and is owned by the user.

        Args:
            user_id: Owner user ID
            session_id: Session ID

        Returns:
            ChatSession or None
        """
        pass

    @abstractmethod
    async def list_sessions(
        self,
        user_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> list[ChatSession]:
        """
        List chat sessions for a user, newest first, with message counts.

        Args:
            user_id: Owner user ID
            limit: Max sessions
            offset: Pagination offset

        Returns:
            List of chat sessions
        """
        pass

    @abstractmethod
    async def delete_session(self, user_id: str, session_id: str) -> bool:
        """
        Delete a session and its messages (messages first).

        Args:
            user_id: Owner user ID
            session_id: Session ID

        Returns:
            True if a session was deleted
        """
        pass

    @abstractmethod
    async def list_messages(self, user_id: str, session_id: str) -> list[ChatMessage]:
        """
        List all messages for a session, oldest first.

        Args:
            user_id: Owner user ID
            session_id: Session ID

        Returns:
            List of chat messages
        """
        pass

    @abstractmethod
    async def recent_messages(
        self,
        user_id: str,
        session_id: str,
        limit: int = 10,
    ) -> list[ChatMessage]:
        """
        Get the last ``limit`` messages of a session, oldest first.

        Args:
            user_id: Owner user ID
            session_id: Session ID
            limit: Max messages

        Returns:
            List of chat messages
        """
        pass

    @abstractmethod
    async def add_exchange(
        self,
        user_id: str,
        session_id: str,
        user_content: str,
        assistant_content: str,
        response_type: ResponseKind,
        category: Optional[str] = None,
        first_exchange_title: Optional[str] = None,
    ) -> tuple[ChatMessage, ChatMessage]:
        """
        Persist one user/assistant turn as a single unit.

        Both messages are written in one transaction. When the turn is the
        session's first (two messages in total), the title is replaced by
        ``first_exchange_title``.

        Args:
            user_id: Owner user ID
            session_id: Session ID
            user_content: User message text
            assistant_content: Assistant reply text
            response_type: How the reply was produced
            category: Optional reply category
            first_exchange_title: Title to set on the first turn

        Returns:
            (user message, assistant message)

        Raises:
            NotFoundError: If the session does not exist for the user
        """
        pass

    @abstractmethod
    async def message_stats(self) -> dict[str, Any]:
        """
        Aggregate message counts for analytics.

        Returns:
            Dict with total, anonymous, per response type and per category counts
        """
        pass
