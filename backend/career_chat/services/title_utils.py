"""
Session title heuristics.
"""

from __future__ import annotations

from typing import Optional

from career_chat.models.chat_session import DEFAULT_SESSION_TITLE

TITLE_PREFIX_LENGTH = 30

# (cues, label): first match wins
_TITLE_PATTERNS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("help", "how"), "Help Request"),
    (("code", "programming"), "Code Discussion"),
    (("explain", "what is"), "Explanation"),
    (("create", "build"), "Project Creation"),
)


def derive_title(first_user_message: Optional[str]) -> str:
    """
    Build a short session title from the first user message.

    Categorical cues win; otherwise the first three words longer than three
    characters are capitalised; otherwise the message is cut to a prefix.
    """
    if not first_user_message or not first_user_message.strip():
        return DEFAULT_SESSION_TITLE

    content = first_user_message.strip()
    lowered = content.lower()

    for cues, label in _TITLE_PATTERNS:
        if any(cue in lowered for cue in cues):
            return label

    words = [word for word in content.split() if len(word) > 3][:3]
    if words:
        return " ".join(word[0].upper() + word[1:].lower() for word in words)

    if len(content) > TITLE_PREFIX_LENGTH:
        return content[:TITLE_PREFIX_LENGTH] + "..."
    return content

