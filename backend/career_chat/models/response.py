"""
Assistant reply models produced by the classifier and generator.
"""

from typing import Optional

from pydantic import BaseModel, Field

from career_chat.models.enums import ResponseKind


class Classification(BaseModel):
    """Outcome of matching a message against the canned answer catalogue."""

    is_common: bool
    text: str = ""
    category: Optional[str] = None
    confidence: Optional[float] = None
    follow_up_questions: list[str] = Field(default_factory=list)
    related_topics: list[str] = Field(default_factory=list)


class GeneratedResponse(BaseModel):
    """Assistant reply with its provenance."""

    text: str
    kind: ResponseKind
    category: Optional[str] = None


class UserIntent(BaseModel):
    """Heuristic reading of a user message."""

    intent: str = "question"
    urgency: str = "low"
    experience_level: str = "unknown"
    emotional_state: str = "neutral"
