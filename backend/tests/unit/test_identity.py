"""
Unit tests for identity resolution and auth providers.
"""

import pytest
from jose import JWTError

from career_chat.core.config import Settings
from career_chat.api.deps import create_auth_provider
from career_chat.core.exceptions import AuthenticationError, ConfigurationError
from career_chat.core.security import create_access_token
from career_chat.infrastructure.auth.local_auth import LocalAuthProvider
from career_chat.infrastructure.local.mock_auth import MockAuthProvider
from career_chat.interfaces.auth_provider import IAuthProvider
from career_chat.services.identity import IdentityResolver, parse_bearer_token


class BrokenAuthProvider(IAuthProvider):
    async def verify_token(self, token):
        raise ConnectionError("auth backend down")

    def is_enabled(self):
        return True


class RejectingAuthProvider(IAuthProvider):
    async def verify_token(self, token):
        raise JWTError("Signature has expired")

    def is_enabled(self):
        return True


@pytest.fixture
def local_settings():
    return Settings(_env_file=None, AUTH_PROVIDER="local", LOCAL_JWT_SECRET="test-secret")


class TestParseBearerToken:
    def test_valid(self):
        assert parse_bearer_token("Bearer abc") == "abc"
        assert parse_bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("header", ["abc", "Token abc", "Bearer a b", "Bearer"])
    def test_invalid(self, header):
        with pytest.raises(AuthenticationError):
            parse_bearer_token(header)


@pytest.mark.asyncio
async def test_missing_header_is_anonymous():
    """No Authorization header resolves to a guest."""
    identity = await IdentityResolver(MockAuthProvider()).resolve(None)
    assert identity.authenticated is False
    assert identity.user_id is None


@pytest.mark.asyncio
async def test_disabled_provider_is_anonymous():
    """A disabled provider ignores bearer tokens."""
    identity = await IdentityResolver(MockAuthProvider(enabled=False)).resolve("Bearer alice")
    assert identity.authenticated is False


@pytest.mark.asyncio
async def test_mock_token_is_user_id():
    """Mock auth treats the token as the user id."""
    identity = await IdentityResolver(MockAuthProvider()).resolve("Bearer alice")
    assert identity.authenticated is True
    assert identity.user_id == "alice"


@pytest.mark.asyncio
async def test_rejected_token_raises():
    """An invalid or expired token is an authentication failure."""
    with pytest.raises(AuthenticationError):
        await IdentityResolver(RejectingAuthProvider()).resolve("Bearer stale")


@pytest.mark.asyncio
async def test_provider_failure_falls_back_to_anonymous():
    """A broken auth backend degrades callers to guests."""
    identity = await IdentityResolver(BrokenAuthProvider()).resolve("Bearer alice")
    assert identity.authenticated is False


@pytest.mark.asyncio
async def test_local_provider_round_trip(local_settings):
    """Tokens issued locally verify to their subject."""
    token = create_access_token("user-42", local_settings)
    identity = await IdentityResolver(LocalAuthProvider(local_settings)).resolve(f"Bearer {token}")
    assert identity.user_id == "user-42"


@pytest.mark.asyncio
async def test_local_provider_rejects_foreign_signature(local_settings):
    """A token signed with another secret is rejected."""
    other = local_settings.model_copy(update={"LOCAL_JWT_SECRET": "other-secret"})
    token = create_access_token("user-42", other)
    with pytest.raises(AuthenticationError):
        await IdentityResolver(LocalAuthProvider(local_settings)).resolve(f"Bearer {token}")


def test_local_provider_requires_secret():
    with pytest.raises(ValueError):
        LocalAuthProvider(Settings(_env_file=None, AUTH_PROVIDER="local", LOCAL_JWT_SECRET=""))


@pytest.mark.asyncio
async def test_mock_expired_token_raises():
    """Mock tokens marked expired behave like a stale JWT."""
    with pytest.raises(AuthenticationError):
        await IdentityResolver(MockAuthProvider()).resolve("Bearer expired-alice")


class TestCreateAuthProvider:
    def test_development_defaults_to_mock(self):
        provider = create_auth_provider(Settings(_env_file=None, APP_ENV="development"))
        assert isinstance(provider, MockAuthProvider)

    def test_production_refuses_mock(self):
        """Production defaults never hand out the token-is-user-id provider."""
        with pytest.raises(ConfigurationError):
            create_auth_provider(Settings(_env_file=None, APP_ENV="production"))

    def test_production_uses_local_jwt(self):
        settings = Settings(
            _env_file=None,
            APP_ENV="production",
            AUTH_PROVIDER="local",
            LOCAL_JWT_SECRET="prod-secret",
        )
        assert isinstance(create_auth_provider(settings), LocalAuthProvider)
