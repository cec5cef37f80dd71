"""
Custom exceptions for the application.

Every error carries a machine-readable ``kind``, the HTTP status it maps to,
and whether a client may retry it automatically.
"""

from typing import Any, Optional


class CareerChatError(Exception):
    """Base exception for career chat."""

    kind = "server_error"
    status_code = 500
    retryable = False

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(CareerChatError):
    """Invalid input."""

    kind = "validation"
    status_code = 422


class RateLimitError(CareerChatError):
    """Guest quota exhausted."""

    kind = "rate_limited"
    status_code = 429


class AuthenticationError(CareerChatError):
    """Authentication failed or expired."""

    kind = "unauthorized"
    status_code = 401


class ForbiddenError(CareerChatError):
    """Operation not allowed in this context."""

    kind = "forbidden"
    status_code = 403


class NotFoundError(CareerChatError):
    """Resource not found."""

    kind = "not_found"
    status_code = 404


class GenerationError(CareerChatError):
    """The response generator failed."""

    kind = "generation_failed"
    status_code = 502


class GenerationConfigError(GenerationError):
    """The response generator is not configured (missing credential)."""

    kind = "generation_unconfigured"
    status_code = 503


class GenerationTimeoutError(GenerationError):
    """The response generator did not answer in time."""

    kind = "generation_timeout"
    status_code = 504


class ConfigurationError(CareerChatError):
    """The application is configured in a way it refuses to run with."""

    kind = "misconfigured"
    status_code = 500


class InfrastructureError(CareerChatError):
    """Infrastructure-related error (DB, external services, etc.)."""

    kind = "server_error"
    status_code = 500
    retryable = True


TransientServerError = InfrastructureError


class StorageUnavailableError(InfrastructureError):
    """The database could not be reached or refused the operation."""

    kind = "storage_unavailable"
    status_code = 503


RATE_LIMIT_MESSAGE = (
    "You've reached the message limit for guests. "
    "Please sign in to continue chatting without limits."
)
