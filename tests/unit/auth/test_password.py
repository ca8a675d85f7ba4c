"""Unit tests for the bcrypt password hasher."""

import pytest

from infrastructure.auth.password import PasswordHasher


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_hash_is_not_the_plaintext(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("abcdef")

        assert hashed != "abcdef"
        assert hashed.startswith("$2")

    def test_hashes_are_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("abcdef") != hasher.hash("abcdef")

    def test_verify_accepts_the_right_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("abcdef")

        assert hasher.verify("abcdef", hashed) is True

    def test_verify_rejects_a_wrong_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("abcdef")

        assert hasher.verify("abcdeg", hashed) is False
