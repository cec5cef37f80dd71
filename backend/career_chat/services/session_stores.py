"""
Per-request session persistence paths.

PersistedStore keeps an authenticated user's sessions in the database.
EphemeralClientStore serves anonymous guests, whose sessions live in the
browser: it never reads or writes the database and only echoes what the
client should store.
"""

from __future__ import annotations

from typing import Optional

from career_chat.core.exceptions import AuthenticationError, NotFoundError
from career_chat.interfaces.chat_session_repository import IChatSessionRepository
from career_chat.interfaces.session_store import ISessionStore
from career_chat.models.chat_session import (
    DEFAULT_SESSION_TITLE,
    ChatMessage,
    ChatSession,
    is_anonymous_session,
    new_anonymous_session_id,
    new_temporary_message_id,
)
from career_chat.models.enums import MessageRole
from career_chat.models.identity import Identity
from career_chat.models.response import GeneratedResponse
from career_chat.utils.datetime_utils import utcnow_naive


class PersistedStore(ISessionStore):
    """Database-backed sessions owned by one user."""

    ephemeral = False

    def __init__(self, repo: IChatSessionRepository, user_id: str):
        self.repo = repo
        self.user_id = user_id

    async def _require_session(self, session_id: str) -> ChatSession:
        session = await self.repo.get_session(self.user_id, session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    async def list_sessions(self) -> list[ChatSession]:
        return await self.repo.list_sessions(self.user_id)

    async def create_session(self, title: Optional[str] = None) -> ChatSession:
        return await self.repo.create_session(self.user_id, title or DEFAULT_SESSION_TITLE)

    async def delete_session(self, session_id: str) -> bool:
        return await self.repo.delete_session(self.user_id, session_id)

    async def list_messages(self, session_id: str) -> list[ChatMessage]:
        await self._require_session(session_id)
        return await self.repo.list_messages(self.user_id, session_id)

    async def load_history(self, session_id: str, limit: int) -> list[dict[str, str]]:
        await self._require_session(session_id)
        messages = await self.repo.recent_messages(self.user_id, session_id, limit=limit)
        return [{"role": message.role.value, "content": message.content} for message in messages]

    async def record_exchange(
        self,
        session_id: str,
        user_content: str,
        reply: GeneratedResponse,
        title: Optional[str] = None,
    ) -> tuple[ChatMessage, ChatMessage]:
        return await self.repo.add_exchange(
            self.user_id,
            session_id,
            user_content=user_content,
            assistant_content=reply.text,
            response_type=reply.kind,
            category=reply.category,
            first_exchange_title=title,
        )


class EphemeralClientStore(ISessionStore):
    """Anonymous sessions held by the client; nothing is stored server-side."""

    ephemeral = True

    async def list_sessions(self) -> list[ChatSession]:
        return []

    async def create_session(self, title: Optional[str] = None) -> ChatSession:
        now = utcnow_naive()
        return ChatSession(
            id=new_anonymous_session_id(),
            title=title or DEFAULT_SESSION_TITLE,
            created_at=now,
            updated_at=now,
            message_count=0,
        )

    async def delete_session(self, session_id: str) -> bool:
        # The client deletes its own copy
        return True

    async def list_messages(self, session_id: str) -> list[ChatMessage]:
        return []

    async def load_history(self, session_id: str, limit: int) -> list[dict[str, str]]:
        return []

    async def record_exchange(
        self,
        session_id: str,
        user_content: str,
        reply: GeneratedResponse,
        title: Optional[str] = None,
    ) -> tuple[ChatMessage, ChatMessage]:
        now = utcnow_naive()
        user_message = ChatMessage(
            id=new_temporary_message_id("user"),
            session_id=session_id,
            role=MessageRole.USER,
            content=user_content,
            timestamp=now,
            is_anonymous=True,
        )
        ai_message = ChatMessage(
            id=new_temporary_message_id("ai"),
            session_id=session_id,
            role=MessageRole.ASSISTANT,
            content=reply.text,
            timestamp=now,
            is_anonymous=True,
            response_type=reply.kind,
            category=reply.category,
        )
        return user_message, ai_message


def select_session_store(identity: Identity, repo: IChatSessionRepository) -> ISessionStore:
    """Store for registry operations: signed-in users get the database."""
    if identity.authenticated and identity.user_id:
        return PersistedStore(repo, identity.user_id)
    return EphemeralClientStore()


def store_for_session(
    identity: Identity,
    session_id: str,
    repo: IChatSessionRepository,
) -> ISessionStore:
    """
    Store for one session id.

    Anonymous-prefixed ids are always client-held, whoever asks.

    Raises:
        AuthenticationError: A guest addressed a database session
    """
    if is_anonymous_session(session_id):
        return EphemeralClientStore()
    if not identity.authenticated or not identity.user_id:
        raise AuthenticationError("Please sign in to access this conversation.")
    return PersistedStore(repo, identity.user_id)
