"""
Session registry.
"""

from __future__ import annotations

from typing import Optional

from career_chat.core.logger import logger
from career_chat.interfaces.chat_session_repository import IChatSessionRepository
from career_chat.models.chat_session import ChatSession
from career_chat.models.identity import Identity
from career_chat.services.session_stores import select_session_store


class SessionService:
    """List, create and delete chat sessions for the caller."""

    def __init__(self, session_repo: IChatSessionRepository):
        self.session_repo = session_repo

    async def list_sessions(self, identity: Identity) -> list[ChatSession]:
        """Newest first. Guests get an empty list; their sessions live client-side."""
        store = select_session_store(identity, self.session_repo)
        return await store.list_sessions()

    async def create_session(self, identity: Identity, title: Optional[str] = None) -> ChatSession:
        store = select_session_store(identity, self.session_repo)
        return await store.create_session(title)

    async def delete_session(self, identity: Identity, session_id: str) -> None:
        """Delete a session. Missing or foreign sessions are left alone."""
        store = select_session_store(identity, self.session_repo)
        deleted = await store.delete_session(session_id)
        if not deleted:
            logger.info(f"Delete of unknown session {session_id} ignored")
