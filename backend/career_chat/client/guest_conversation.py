"""
Guest conversation flow: the server answers, the client keeps the history.
"""

from __future__ import annotations

from typing import Optional

import httpx

from career_chat.client.anonymous_store import AnonymousSession, AnonymousSessionStore
from career_chat.client.api_client import CareerChatClient
from career_chat.client.errors import ChatApiError, get_error_message
from career_chat.models.chat import SendMessageResponse
from career_chat.models.enums import MessageRole


class GuestConversation:
    """Drive an anonymous chat against the API and record it locally."""

    def __init__(self, client: CareerChatClient, store: AnonymousSessionStore):
        self.client = client
        self.store = store
        self.remaining: Optional[int] = None
        # What to show the user after the last failed send
        self.last_error: Optional[str] = None

    def start(self, title: Optional[str] = None) -> AnonymousSession:
        """Open a new local session; nothing is sent to the server."""
        if title:
            return self.store.create_session(title)
        return self.store.create_session()

    async def send(self, session_id: str, content: str) -> SendMessageResponse:
        """
        Send one message and store both sides of the turn locally.

        Failed requests (including rate limiting) leave the store untouched,
        set ``last_error`` and re-raise.
        """
        try:
            result = await self.client.send_message(content, session_id=session_id)
        except (ChatApiError, httpx.TransportError) as exc:
            self.last_error = get_error_message(exc)
            raise

        self.last_error = None
        self.store.add_message(session_id, result.user_message.content, MessageRole.USER)
        self.store.add_message(session_id, result.ai_message.content, MessageRole.ASSISTANT)
        if result.rate_limit_info is not None:
            self.remaining = result.rate_limit_info.remaining
        return result
