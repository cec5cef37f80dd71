"""
Mock authentication provider for local development and tests.

The bearer token is the user id. Tokens starting with ``expired`` are rejected
the way a real provider rejects a stale JWT, so the sign-in-again path can be
exercised without issuing tokens.
"""

from jose import JWTError

from career_chat.interfaces.auth_provider import IAuthProvider, User

EXPIRED_TOKEN_PREFIX = "expired"


class MockAuthProvider(IAuthProvider):
    """Mock auth provider: the bearer token is the user id."""

    def __init__(self, enabled: bool = True):
        """
        Args:
            enabled: Whether bearer tokens are honoured at all
        """
        self._enabled = enabled
        self._known_users = {
            "dev_user": User(id="dev_user", email="dev@example.com", display_name="Developer"),
            "test_user": User(id="test_user", email="test@example.com", display_name="Test User"),
        }

    async def verify_token(self, token: str) -> User:
        if not token or token.startswith(EXPIRED_TOKEN_PREFIX):
            raise JWTError("Token expired or empty")
        known = self._known_users.get(token)
        if known:
            return known
        email = token if "@" in token else f"{token}@example.com"
        return User(id=token, email=email, display_name=token)

    def is_enabled(self) -> bool:
        return self._enabled
