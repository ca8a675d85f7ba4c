"""Password hashing with bcrypt via passlib."""

from passlib.context import CryptContext


class PasswordHasher:
    """Salted one-way hashing for user passwords."""

    def __init__(self, rounds: int = 10) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a plaintext password with a fresh random salt."""
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash."""
        return self._context.verify(password, hashed)
