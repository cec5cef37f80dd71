"""
Enum definitions for the application.

These enums are used across models and provide type-safe role/kind values.
"""

from enum import Enum


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ResponseKind(str, Enum):
    """
    How an assistant reply was produced.

    AI = Generated by the language model
    COMMON = Canned answer matched to a career category
    REDIRECT = Canned redirect for off-topic questions
    """

    AI = "ai"
    COMMON = "common"
    REDIRECT = "redirect"


class StoreAction(str, Enum):
    """Mutation emitted by the client-side anonymous session store."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
