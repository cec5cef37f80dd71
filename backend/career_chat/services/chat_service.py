"""
Chat orchestration.

One call to send_message is one conversational turn: validate, pick the
session's store, charge guest quota, build context, generate the reply, then
persist (or echo) both messages.
"""

from __future__ import annotations

from typing import Optional

from career_chat.core.config import Settings, get_settings
from career_chat.core.exceptions import ValidationError
from career_chat.core.logger import logger
from career_chat.interfaces.chat_session_repository import IChatSessionRepository
from career_chat.models.chat import (
    ChatAnalytics,
    RateLimitInfo,
    RateLimitStatus,
    ResponseTypeCounts,
    SendMessageResponse,
)
from career_chat.models.chat_session import ChatMessage
from career_chat.models.enums import ResponseKind
from career_chat.models.identity import Identity
from career_chat.services.career_responses import analyze_user_intent, get_response_stats
from career_chat.services.rate_limit_service import RateLimitService
from career_chat.services.response_generator import ResponseGenerator
from career_chat.services.session_stores import select_session_store, store_for_session
from career_chat.services.title_utils import derive_title


class ChatService:
    """Message orchestrator for authenticated and guest conversations."""

    def __init__(
        self,
        session_repo: IChatSessionRepository,
        rate_limit_service: RateLimitService,
        generator: ResponseGenerator,
        settings: Optional[Settings] = None,
    ):
        self.session_repo = session_repo
        self.rate_limit_service = rate_limit_service
        self.generator = generator
        self._settings = settings or get_settings()

    def _validate_content(self, content: str) -> str:
        text = (content or "").strip()
        if not text:
            raise ValidationError("Message cannot be empty")
        if len(text) > self._settings.MAX_MESSAGE_LENGTH:
            raise ValidationError(
                f"Message is too long (max {self._settings.MAX_MESSAGE_LENGTH} characters)",
                details={"max_length": self._settings.MAX_MESSAGE_LENGTH},
            )
        return text

    async def send_message(
        self,
        identity: Identity,
        client_ip: str,
        session_id: Optional[str],
        content: str,
    ) -> SendMessageResponse:
        """
        Run one conversational turn.

        Raises:
            ValidationError: Empty or oversized content
            AuthenticationError: A guest addressed a database session
            NotFoundError: The session does not belong to the caller
            RateLimitError: Guest quota exhausted (checked before generation)
            GenerationError: The reply could not be produced
            StorageUnavailableError: The database failed
        """
        text = self._validate_content(content)

        if session_id:
            store = store_for_session(identity, session_id, self.session_repo)
        else:
            store = select_session_store(identity, self.session_repo)
            session_id = (await store.create_session()).id

        rate_limit_info = None
        if store.ephemeral and not identity.authenticated:
            # Charged before generation: a failed reply still costs quota
            remaining = await self.rate_limit_service.charge(client_ip)
            rate_limit_info = RateLimitInfo(remaining=remaining)

        history = await store.load_history(session_id, self._settings.HISTORY_CONTEXT_LIMIT)
        reply = await self.generator.generate(text, history)

        title = None if store.ephemeral else derive_title(text)
        user_message, ai_message = await store.record_exchange(
            session_id,
            user_content=text,
            reply=reply,
            title=title,
        )

        intent = analyze_user_intent(text)
        logger.info(
            f"Chat turn completed: session={session_id} kind={reply.kind.value} "
            f"ephemeral={store.ephemeral} intent={intent.intent} urgency={intent.urgency} "
            f"mood={intent.emotional_state}"
        )
        return SendMessageResponse(
            user_message=user_message,
            ai_message=ai_message,
            session_id=session_id,
            rate_limit_info=rate_limit_info,
        )

    async def get_messages(self, identity: Identity, session_id: str) -> list[ChatMessage]:
        """Messages of a session, oldest first; empty for client-held sessions."""
        store = store_for_session(identity, session_id, self.session_repo)
        return await store.list_messages(session_id)

    async def get_rate_limit_status(self, identity: Identity, client_ip: str) -> RateLimitStatus:
        remaining = await self.rate_limit_service.status_for(identity, client_ip)
        return RateLimitStatus(remaining=remaining)

    async def reset_rate_limit(self, client_ip: str) -> None:
        await self.rate_limit_service.reset(client_ip)

    async def get_analytics(self) -> ChatAnalytics:
        """Usage totals over persisted messages plus canned-catalogue stats."""
        stats = await self.session_repo.message_stats()
        by_type = stats["response_types"]
        ai = by_type.get(ResponseKind.AI.value, 0)
        common = by_type.get(ResponseKind.COMMON.value, 0)
        redirect = by_type.get(ResponseKind.REDIRECT.value, 0)
        answered = ai + common

        return ChatAnalytics(
            total_messages=stats["total"],
            anonymous_messages=stats["anonymous"],
            authenticated_messages=stats["total"] - stats["anonymous"],
            response_types=ResponseTypeCounts(
                ai=ai,
                common=common,
                redirect=redirect,
                total=answered,
            ),
            categories=stats["categories"],
            catalogue=get_response_stats().to_dict(),
            common_response_rate=round(common / answered * 100, 2) if answered else 0.0,
            api_calls_saved=common,
        )
