"""Unit tests for authentication dependencies."""

from uuid import uuid4

import pytest

from api.dependencies.auth import get_auth_provider, get_current_user
from core.config import Settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


@pytest.fixture
def mock_auth_provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


@pytest.fixture
def test_token_user() -> TokenUser:
    return TokenUser(id=uuid4(), email="test@devconnector.io")


# --- get_current_user ---


class TestGetCurrentUser:
    async def test_returns_user_with_valid_token(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ) -> None:
        token = mock_auth_provider.create_token(test_token_user)

        result = await get_current_user(token, mock_auth_provider)

        assert result.email == test_token_user.email
        assert result.id == test_token_user.id

    async def test_raises_when_no_token(self, mock_auth_provider: JWTAuthProvider) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(None, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.message == "No token, authorization denied"

    async def test_raises_when_token_is_empty(self, mock_auth_provider: JWTAuthProvider) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user("", mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED

    async def test_raises_when_invalid_token(self, mock_auth_provider: JWTAuthProvider) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user("invalid.jwt.token", mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN
        assert exc_info.value.message == "Token is not valid"

    async def test_raises_when_expired_token(self, test_token_user: TokenUser) -> None:
        # Negative expiry produces an already-expired token
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        token = provider.create_token(test_token_user)

        normal_provider = JWTAuthProvider(
            secret_key="test-secret", algorithm="HS256", expire_minutes=30
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(token, normal_provider)

        assert exc_info.value.error_code == ErrorCode.TOKEN_EXPIRED
        assert exc_info.value.status_code == 401


# --- get_auth_provider ---


class TestGetAuthProvider:
    def test_builds_provider_from_injected_settings(self, test_token_user: TokenUser) -> None:
        settings = Settings(jwt_secret_key="injected-secret", jwt_expire_minutes=5)

        provider = get_auth_provider(settings)
        token = provider.create_token(test_token_user)

        verifier = JWTAuthProvider(secret_key="injected-secret")
        assert verifier.decode_token(token).id == test_token_user.id

    def test_tokens_do_not_verify_under_a_different_secret(
        self, test_token_user: TokenUser
    ) -> None:
        first = get_auth_provider(Settings(jwt_secret_key="first-secret"))
        second = get_auth_provider(Settings(jwt_secret_key="second-secret"))

        with pytest.raises(AuthenticationError):
            second.decode_token(first.create_token(test_token_user))
