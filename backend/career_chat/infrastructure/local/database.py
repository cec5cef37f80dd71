"""
Database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
SQLite (aiosqlite) is the default; any async SQLAlchemy URL works.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from career_chat.core.config import get_settings
from career_chat.core.exceptions import StorageUnavailableError
from career_chat.core.logger import logger
from career_chat.utils.datetime_utils import utcnow_naive


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class ChatSessionORM(Base):
    """Chat session ORM model."""

    __tablename__ = "chat_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(String(200), nullable=False, default="New Chat")
    created_at = Column(DateTime, default=utcnow_naive, index=True)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


class ChatMessageORM(Base):
    """Chat message ORM model."""

    __tablename__ = "chat_messages"

    # Integer key keeps insertion order stable for messages sharing a timestamp
    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(
        String(36),
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    response_type = Column(String(20), nullable=True)
    category = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=utcnow_naive, index=True)


class AnonymousRequestORM(Base):
    """Guest quota counter, one row per client IP."""

    __tablename__ = "anonymous_requests"

    ip_address = Column(String(64), primary_key=True)
    count = Column(Integer, nullable=False, default=0)
    reset_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow_naive)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


# ===========================================
# Database Session Management
# ===========================================


def get_engine(database_url: str | None = None):
    """Get async engine instance."""
    settings = get_settings()
    url = database_url or settings.DATABASE_URL
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"timeout": settings.DATABASE_TIMEOUT_SECONDS}
    return create_async_engine(url, echo=settings.DEBUG, connect_args=connect_args)


def get_session_factory(engine=None):
    """Get async session factory."""
    engine = engine or get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine=None):
    """Initialize database tables."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncIterator[None]:
    """Translate SQLAlchemy failures into StorageUnavailableError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Storage failure during {operation}: {exc}")
        raise StorageUnavailableError(
            "Chat storage is temporarily unavailable. Please try again.",
            details={"operation": operation},
        ) from exc
