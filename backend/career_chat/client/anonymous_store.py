"""
Client-held storage for guest conversations.

Guest sessions never reach the server's database. Each browser tab (or any
client context) owns a namespace inside one shared storage key, and every
mutation is published to subscribers so other views can refresh.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Protocol
from uuid import uuid4

from pydantic import Field, ValidationError

from career_chat.core.logger import logger
from career_chat.models.chat_session import (
    DEFAULT_SESSION_TITLE,
    CamelModel,
    new_anonymous_session_id,
)
from career_chat.models.enums import MessageRole, StoreAction
from career_chat.utils.datetime_utils import utcnow_naive

STORAGE_KEY = "anonymous_chat_sessions"
AUTO_TITLE_LENGTH = 50


def new_tab_id() -> str:
    return f"anon_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


class AnonymousMessage(CamelModel):
    id: str
    content: str
    role: MessageRole
    timestamp: datetime


class AnonymousSession(CamelModel):
    id: str
    title: str = DEFAULT_SESSION_TITLE
    created_at: datetime
    message_count: int = 0
    messages: list[AnonymousMessage] = Field(default_factory=list)


@dataclass(frozen=True)
class StoreEvent:
    action: StoreAction
    session_id: str


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    """Process-local storage, shared by stores given the same instance."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Key/value storage persisted as one JSON file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable storage file {self._path}: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data), encoding="utf-8")


class AnonymousSessionStore:
    """Guest sessions for one client context, newest first."""

    def __init__(self, storage: KeyValueStorage, tab_id: Optional[str] = None):
        self._storage = storage
        self.tab_id = tab_id or new_tab_id()
        self._subscribers: list[Callable[[StoreEvent], None]] = []

    # ---- persistence ----

    def _read_namespaces(self) -> dict[str, list]:
        raw = self._storage.get(STORAGE_KEY)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Discarding corrupt anonymous session storage")
            return {}
        return data if isinstance(data, dict) else {}

    def _load(self) -> list[AnonymousSession]:
        entries = self._read_namespaces().get(self.tab_id) or []
        if not isinstance(entries, list):
            return []
        try:
            return [AnonymousSession.model_validate(entry) for entry in entries]
        except ValidationError:
            logger.warning(f"Discarding corrupt anonymous sessions for {self.tab_id}")
            return []

    def _save(self, sessions: list[AnonymousSession]) -> None:
        namespaces = self._read_namespaces()
        namespaces[self.tab_id] = [
            session.model_dump(mode="json", by_alias=True) for session in sessions
        ]
        self._storage.set(STORAGE_KEY, json.dumps(namespaces))

    # ---- pub/sub ----

    def subscribe(self, callback: Callable[[StoreEvent], None]) -> Callable[[], None]:
        """Register a mutation listener; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _emit(self, action: StoreAction, session_id: str) -> None:
        event = StoreEvent(action=action, session_id=session_id)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Anonymous store subscriber failed on {action.value}")

    # ---- operations ----

    def list_sessions(self) -> list[AnonymousSession]:
        return self._load()

    def get_session(self, session_id: str) -> Optional[AnonymousSession]:
        return next((s for s in self._load() if s.id == session_id), None)

    def create_session(self, title: str = DEFAULT_SESSION_TITLE) -> AnonymousSession:
        session = AnonymousSession(
            id=new_anonymous_session_id(),
            title=title or DEFAULT_SESSION_TITLE,
            created_at=utcnow_naive(),
        )
        sessions = self._load()
        sessions.insert(0, session)
        self._save(sessions)
        self._emit(StoreAction.CREATED, session.id)
        return session

    def add_message(
        self,
        session_id: str,
        content: str,
        role: MessageRole,
    ) -> Optional[AnonymousMessage]:
        """
        Append a message. Unknown sessions are ignored.

        The first user message also becomes the session title.
        """
        sessions = self._load()
        session = next((s for s in sessions if s.id == session_id), None)
        if session is None:
            return None

        message = AnonymousMessage(
            id=f"msg_{int(time.time() * 1000)}_{uuid4().hex[:9]}",
            content=content,
            role=role,
            timestamp=utcnow_naive(),
        )
        session.messages.append(message)
        session.message_count = len(session.messages)

        user_messages = [m for m in session.messages if m.role == MessageRole.USER]
        if role == MessageRole.USER and len(user_messages) == 1:
            suffix = "..." if len(content) > AUTO_TITLE_LENGTH else ""
            session.title = content[:AUTO_TITLE_LENGTH] + suffix

        self._save(sessions)
        self._emit(StoreAction.UPDATED, session_id)
        return message

    def get_messages(self, session_id: str) -> list[AnonymousMessage]:
        session = self.get_session(session_id)
        return session.messages if session else []

    def delete_session(self, session_id: str) -> None:
        sessions = self._load()
        remaining = [s for s in sessions if s.id != session_id]
        if len(remaining) == len(sessions):
            return
        self._save(remaining)
        self._emit(StoreAction.DELETED, session_id)
