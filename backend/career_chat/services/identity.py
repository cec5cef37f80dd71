"""
Identity resolution.

Turns the Authorization header into an Identity. A caller the auth backend
cannot vouch for is treated as an anonymous guest, so a broken auth backend
only ever pushes callers onto the rate-limited path.
"""

from __future__ import annotations

from typing import Optional

from jose import JWTError

from career_chat.core.exceptions import AuthenticationError
from career_chat.core.logger import logger
from career_chat.interfaces.auth_provider import IAuthProvider
from career_chat.models.identity import Identity


def parse_bearer_token(authorization: str) -> str:
    """Extract token from "Bearer <token>"."""
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise AuthenticationError("Invalid authorization header format")
    return token


class IdentityResolver:
    """Resolve the caller of a request."""

    def __init__(self, auth_provider: IAuthProvider):
        self._auth_provider = auth_provider

    async def resolve(self, authorization: Optional[str]) -> Identity:
        """
        Resolve the caller from the raw Authorization header.

        Raises:
            AuthenticationError: Malformed header, or a token the provider rejects
        """
        if not authorization or not self._auth_provider.is_enabled():
            return Identity.anonymous()

        token = parse_bearer_token(authorization)
        try:
            user = await self._auth_provider.verify_token(token)
        except JWTError as exc:
            raise AuthenticationError("Your session has expired. Please sign in again.") from exc
        except Exception as exc:
            logger.warning(f"Auth backend unavailable, treating caller as anonymous: {exc}")
            return Identity.anonymous()

        return Identity.for_user(user.id)
