"""
Client-side error classification and retry policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0

NETWORK = "network"
TIMEOUT = "timeout"
UNKNOWN = "unknown"

# Kinds a client may retry on its own
RETRYABLE_KINDS = frozenset({NETWORK, TIMEOUT, "server_error", "storage_unavailable"})

USER_MESSAGES = {
    NETWORK: "Network error. Please check your connection and try again.",
    TIMEOUT: "Request timed out. Please try again.",
    "rate_limited": (
        "You've reached the message limit for guests. "
        "Please sign in to continue chatting without limits."
    ),
    "unauthorized": "Session expired. Please sign in again.",
    "forbidden": "This action is not available.",
    "not_found": "This conversation could not be found.",
    "validation": "Invalid input. Please check your message and try again.",
    "generation_failed": "The assistant could not answer. Please try again.",
    "generation_unconfigured": "The assistant is not available right now.",
    "generation_timeout": "The assistant took too long to answer. Please try again.",
    "server_error": "Server error. Please try again in a moment.",
    "storage_unavailable": "Server error. Please try again in a moment.",
}
DEFAULT_USER_MESSAGE = "Something went wrong. Please try again."


class ChatApiError(Exception):
    """Error returned by the career chat API."""

    def __init__(
        self,
        kind: str,
        message: str,
        status_code: Optional[int] = None,
        retryable: bool = False,
        details: Optional[Any] = None,
    ):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        self.details = details
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ChatApiError":
        """Build from an error envelope, tolerating non-JSON bodies."""
        try:
            body = response.json()
        except ValueError:
            body = None

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            return cls(
                kind=error.get("kind", UNKNOWN),
                message=error.get("message", response.reason_phrase),
                status_code=response.status_code,
                retryable=bool(error.get("retryable", False)),
                details=error.get("details"),
            )

        kind = "server_error" if response.status_code >= 500 else UNKNOWN
        return cls(
            kind=kind,
            message=response.text or response.reason_phrase,
            status_code=response.status_code,
            retryable=kind in RETRYABLE_KINDS,
        )


@dataclass(frozen=True)
class ClassifiedError:
    kind: str
    message: str
    retryable: bool
    user_message: str


def classify_error(error: BaseException) -> ClassifiedError:
    """Map any client-side failure to a kind, a retry decision and a user message."""
    if isinstance(error, ChatApiError):
        kind = error.kind
        retryable = error.retryable or kind in RETRYABLE_KINDS
        message = error.message
        user_message = message if kind == "rate_limited" else USER_MESSAGES.get(kind, DEFAULT_USER_MESSAGE)
        return ClassifiedError(kind, message, retryable, user_message)

    if isinstance(error, httpx.TimeoutException):
        return ClassifiedError(TIMEOUT, str(error), True, USER_MESSAGES[TIMEOUT])

    if isinstance(error, httpx.TransportError):
        return ClassifiedError(NETWORK, str(error), True, USER_MESSAGES[NETWORK])

    return ClassifiedError(UNKNOWN, str(error) or type(error).__name__, False, DEFAULT_USER_MESSAGE)


def should_retry(error: BaseException, attempt: int, max_retries: int = DEFAULT_MAX_RETRIES) -> bool:
    """Whether attempt number ``attempt`` (0-based) may be followed by another."""
    if attempt >= max_retries:
        return False
    return classify_error(error).retryable


def get_retry_delay(
    attempt: int,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
) -> float:
    """Capped exponential backoff, in seconds."""
    return min(base_delay * (2 ** attempt), max_delay)


def get_error_message(error: BaseException) -> str:
    return classify_error(error).user_message
