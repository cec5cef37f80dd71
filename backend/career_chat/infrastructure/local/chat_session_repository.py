"""
SQLAlchemy implementation of Chat session repository.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import and_, delete, func, select

from career_chat.core.exceptions import NotFoundError
from career_chat.infrastructure.local.database import (
    ChatMessageORM,
    ChatSessionORM,
    get_session_factory,
    storage_errors,
)
from career_chat.interfaces.chat_session_repository import IChatSessionRepository
from career_chat.models.chat_session import DEFAULT_SESSION_TITLE, ChatMessage, ChatSession
from career_chat.models.enums import MessageRole, ResponseKind
from career_chat.utils.datetime_utils import utcnow_naive


class SqliteChatSessionRepository(IChatSessionRepository):
    """SQLite implementation of chat session repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _session_orm_to_model(self, orm: ChatSessionORM, message_count: int = 0) -> ChatSession:
        """Convert session ORM object to Pydantic model."""
        return ChatSession(
            id=orm.id,
            user_id=orm.user_id,
            title=orm.title or DEFAULT_SESSION_TITLE,
            created_at=orm.created_at,
            updated_at=orm.updated_at or orm.created_at,
            message_count=message_count,
        )

    def _message_orm_to_model(self, orm: ChatMessageORM) -> ChatMessage:
        """Convert message ORM object to Pydantic model."""
        return ChatMessage(
            id=str(orm.id),
            session_id=orm.session_id,
            role=MessageRole(orm.role),
            content=orm.content,
            timestamp=orm.created_at,
            is_anonymous=bool(orm.is_anonymous),
            response_type=ResponseKind(orm.response_type) if orm.response_type else None,
            category=orm.category,
        )

    @staticmethod
    def _owned(user_id: str, session_id: str):
        return and_(ChatSessionORM.id == session_id, ChatSessionORM.user_id == user_id)

    async def create_session(self, user_id: str, title: Optional[str] = None) -> ChatSession:
        """Create a chat session owned by a user."""
        async with storage_errors("create_session"):
            async with self._session_factory() as session:
                now = utcnow_naive()
                orm = ChatSessionORM(
                    user_id=user_id,
                    title=title or DEFAULT_SESSION_TITLE,
                    created_at=now,
                    updated_at=now,
                )
                session.add(orm)
                await session.commit()
                await session.refresh(orm)
                return self._session_orm_to_model(orm)

    async def get_session(self, user_id: str, session_id: str) -> Optional[ChatSession]:
        """Get a session owned by the user, with its message count."""
        async with storage_errors("get_session"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(ChatSessionORM).where(self._owned(user_id, session_id))
                )
                orm = result.scalar_one_or_none()
                if not orm:
                    return None
                count = await session.scalar(
                    select(func.count(ChatMessageORM.id)).where(
                        ChatMessageORM.session_id == session_id
                    )
                )
                return self._session_orm_to_model(orm, count or 0)

    async def list_sessions(
        self,
        user_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> list[ChatSession]:
        """List chat sessions for a user, newest first."""
        counts = (
            select(
                ChatMessageORM.session_id.label("session_id"),
                func.count(ChatMessageORM.id).label("message_count"),
            )
            .group_by(ChatMessageORM.session_id)
            .subquery()
        )
        query = (
            select(ChatSessionORM, func.coalesce(counts.c.message_count, 0))
            .outerjoin(counts, counts.c.session_id == ChatSessionORM.id)
            .where(ChatSessionORM.user_id == user_id)
            .order_by(ChatSessionORM.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        async with storage_errors("list_sessions"):
            async with self._session_factory() as session:
                result = await session.execute(query)
                return [
                    self._session_orm_to_model(orm, message_count)
                    for orm, message_count in result.all()
                ]

    async def delete_session(self, user_id: str, session_id: str) -> bool:
        """Delete a session and its messages."""
        async with storage_errors("delete_session"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(ChatSessionORM.id).where(self._owned(user_id, session_id))
                )
                if result.scalar_one_or_none() is None:
                    return False

                # Messages first: the foreign key must never dangle
                await session.execute(
                    delete(ChatMessageORM).where(ChatMessageORM.session_id == session_id)
                )
                await session.execute(
                    delete(ChatSessionORM).where(self._owned(user_id, session_id))
                )
                await session.commit()
                return True

    async def list_messages(self, user_id: str, session_id: str) -> list[ChatMessage]:
        """List messages for a session, oldest first."""
        query = (
            select(ChatMessageORM)
            .join(ChatSessionORM, ChatSessionORM.id == ChatMessageORM.session_id)
            .where(self._owned(user_id, session_id))
            .order_by(ChatMessageORM.created_at.asc(), ChatMessageORM.id.asc())
        )
        async with storage_errors("list_messages"):
            async with self._session_factory() as session:
                result = await session.execute(query)
                return [self._message_orm_to_model(orm) for orm in result.scalars().all()]

    async def recent_messages(
        self,
        user_id: str,
        session_id: str,
        limit: int = 10,
    ) -> list[ChatMessage]:
        """Get the last messages of a session in chronological order."""
        query = (
            select(ChatMessageORM)
            .join(ChatSessionORM, ChatSessionORM.id == ChatMessageORM.session_id)
            .where(self._owned(user_id, session_id))
            .order_by(ChatMessageORM.created_at.desc(), ChatMessageORM.id.desc())
            .limit(limit)
        )
        async with storage_errors("recent_messages"):
            async with self._session_factory() as session:
                result = await session.execute(query)
                messages = [self._message_orm_to_model(orm) for orm in result.scalars().all()]
                return list(reversed(messages))

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
        """Persist a user/assistant turn in one transaction."""
        async with storage_errors("add_exchange"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(ChatSessionORM).where(self._owned(user_id, session_id))
                )
                session_orm = result.scalar_one_or_none()
                if not session_orm:
                    raise NotFoundError(f"Session {session_id} not found")

                now = utcnow_naive()
                user_orm = ChatMessageORM(
                    session_id=session_id,
                    role=MessageRole.USER.value,
                    content=user_content,
                    is_anonymous=False,
                    created_at=now,
                )
                session.add(user_orm)
                await session.flush()

                assistant_orm = ChatMessageORM(
                    session_id=session_id,
                    role=MessageRole.ASSISTANT.value,
                    content=assistant_content,
                    is_anonymous=False,
                    response_type=response_type.value,
                    category=category,
                    created_at=now,
                )
                session.add(assistant_orm)
                await session.flush()

                message_count = await session.scalar(
                    select(func.count(ChatMessageORM.id)).where(
                        ChatMessageORM.session_id == session_id
                    )
                )
                if message_count == 2 and first_exchange_title:
                    session_orm.title = first_exchange_title
                session_orm.updated_at = now

                await session.commit()
                await session.refresh(user_orm)
                await session.refresh(assistant_orm)
                return (
                    self._message_orm_to_model(user_orm),
                    self._message_orm_to_model(assistant_orm),
                )

    async def message_stats(self) -> dict[str, Any]:
        """Aggregate message counts for analytics."""
        assistant = ChatMessageORM.role == MessageRole.ASSISTANT.value
        async with storage_errors("message_stats"):
            async with self._session_factory() as session:
                total = await session.scalar(select(func.count(ChatMessageORM.id)))
                anonymous = await session.scalar(
                    select(func.count(ChatMessageORM.id)).where(
                        ChatMessageORM.is_anonymous.is_(True)
                    )
                )
                by_type = await session.execute(
                    select(ChatMessageORM.response_type, func.count(ChatMessageORM.id))
                    .where(and_(assistant, ChatMessageORM.response_type.is_not(None)))
                    .group_by(ChatMessageORM.response_type)
                )
                by_category = await session.execute(
                    select(ChatMessageORM.category, func.count(ChatMessageORM.id))
                    .where(and_(assistant, ChatMessageORM.category.is_not(None)))
                    .group_by(ChatMessageORM.category)
                )
                return {
                    "total": total or 0,
                    "anonymous": anonymous or 0,
                    "response_types": {kind: count for kind, count in by_type.all()},
                    "categories": {category: count for category, count in by_category.all()},
                }
