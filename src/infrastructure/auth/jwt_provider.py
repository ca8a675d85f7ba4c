"""JWT authentication provider implementation.

Tokens are HS256-signed with a shared secret. Payload structure:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "aud": "user@example.com",
        "iat": 1234567000,
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from uuid import UUID

import structlog
from jose import ExpiredSignatureError, JWTError, jwt

from core.exceptions import InvalidTokenError, TokenExpiredError
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """JWT-based authentication provider.

    Issues and verifies session tokens. The audience claim carries the
    user's email and is informational only; it is not checked on decode.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 6000,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def decode_token(self, token: str) -> TokenUser:
        """
        Verify a JWT and extract user info.

        Args:
            token: The JWT to verify

        Returns:
            TokenUser for the identity the token was issued to

        Raises:
            TokenExpiredError: If the signature is valid but ``exp`` has passed
            InvalidTokenError: For any other verification failure
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except JWTError as exc:
            logger.debug("token_rejected", reason=str(exc))
            raise InvalidTokenError() from exc

        user_id = payload.get("sub")
        email = payload.get("email")

        if not user_id or not email:
            raise InvalidTokenError()

        try:
            return TokenUser(id=UUID(user_id), email=email)
        except ValueError as exc:
            raise InvalidTokenError() from exc

    def create_token(self, user: TokenUser) -> str:
        """
        Create a signed JWT for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        expire = now + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "aud": user.email,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
