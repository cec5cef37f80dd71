"""
Authentication provider interface.

Defines the contract for verifying bearer tokens.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated user."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IAuthProvider(ABC):
    """Abstract interface for authentication providers."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """
        Verify a bearer token.

        Args:
            token: Raw token from the Authorization header

        Returns:
            The authenticated user

        Raises:
            jose.JWTError: If the token is invalid or expired
        """
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """
        Check if authentication is enabled.

        Returns:
            False when no caller can authenticate
        """
        pass
