"""Python client for the career chat API."""

from career_chat.client.anonymous_store import (
    AnonymousSessionStore,
    InMemoryStorage,
    JsonFileStorage,
    StoreEvent,
)
from career_chat.client.api_client import CareerChatClient
from career_chat.client.errors import ChatApiError
from career_chat.client.guest_conversation import GuestConversation

__all__ = [
    "AnonymousSessionStore",
    "CareerChatClient",
    "ChatApiError",
    "GuestConversation",
    "InMemoryStorage",
    "JsonFileStorage",
    "StoreEvent",
]
