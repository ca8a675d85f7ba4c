"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader

from core.config import Settings, get_settings
from core.exceptions import AuthenticationError
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

AUTH_HEADER = "x-auth-token"

# Security scheme for OpenAPI docs
auth_token_header = APIKeyHeader(name=AUTH_HEADER, auto_error=False)


def get_auth_provider(
    settings: Annotated[Settings, Depends(get_settings)],
) -> JWTAuthProvider:
    """Build the token codec from the injected settings."""
    return JWTAuthProvider(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
    )


async def get_current_user(
    token: Annotated[str | None, Depends(auth_token_header)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token is provided
        InvalidTokenError: If the token fails verification
        TokenExpiredError: If the token is past its expiry
    """
    if not token:
        raise AuthenticationError()

    return auth_provider.decode_token(token)


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
