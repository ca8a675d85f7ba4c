"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Represents a user extracted from an auth token."""

    id: UUID
    email: str


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    def decode_token(self, token: str) -> TokenUser:
        """
        Verify an authentication token.

        Args:
            token: The token read from the request header

        Returns:
            The TokenUser the token was issued for

        Raises:
            InvalidTokenError: If the token is malformed or tampered with
            TokenExpiredError: If the token is past its expiry
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...


class IPasswordHasher(Protocol):
    """Protocol for one-way password hashing."""

    def hash(self, password: str) -> str:
        """Hash a plaintext password with a fresh salt."""
        ...

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash."""
        ...
