"""Integration tests for registration and login."""

from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import UserModel
from tests.conftest import RegisterFn


class TestRegisterAPI:
    """POST /api/users"""

    async def test_register_then_fetch_identity(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/users",
            json={"name": "A", "email": "a@x.com", "password": "abcdef"},
        )

        assert response.status_code == 200
        token = response.json()["token"]

        me = await client.get("/api/auth", headers={"x-auth-token": token})

        assert me.status_code == 200
        data = me.json()
        assert set(data) == {"id", "name", "email", "avatar", "date"}
        assert data["name"] == "A"
        assert data["email"] == "a@x.com"
        assert data["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert "password" not in data

    async def test_token_resolves_to_persisted_identity_with_hashed_password(
        self,
        client: AsyncClient,
        auth_provider: JWTAuthProvider,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        response = await client.post(
            "/api/users",
            json={"name": "Dev", "email": "dev@devconnector.io", "password": "abcdef"},
        )
        token_user = auth_provider.decode_token(response.json()["token"])

        async with session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == token_user.id))
            stored = result.scalar_one()

        assert stored.email == "dev@devconnector.io"
        assert stored.password != "abcdef"

    async def test_duplicate_email_is_rejected(
        self, client: AsyncClient, register: RegisterFn
    ) -> None:
        await register(email="dup@devconnector.io")

        response = await client.post(
            "/api/users",
            json={"name": "Again", "email": "DUP@devconnector.io", "password": "abcdef"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "USER_ALREADY_EXISTS"
        assert response.json()["msg"] == "User already exists"

    async def test_all_invalid_fields_reported_together(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/users",
            json={"name": "", "email": "nope", "password": "abc"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert {error["msg"] for error in body["errors"]} == {
            "Name is required",
            "Please include a valid email",
            "Please enter a password with 6 or more characters",
        }
        assert {error["param"] for error in body["errors"]} == {"name", "email", "password"}


class TestLoginAPI:
    """POST /api/auth"""

    async def test_login_returns_token(
        self, client: AsyncClient, register: RegisterFn, auth_provider: JWTAuthProvider
    ) -> None:
        await register(email="login@devconnector.io", password="abcdef")

        response = await client.post(
            "/api/auth", json={"email": "login@devconnector.io", "password": "abcdef"}
        )

        assert response.status_code == 200
        assert auth_provider.decode_token(response.json()["token"]).email == (
            "login@devconnector.io"
        )

    async def test_wrong_password_looks_like_unknown_email(
        self, client: AsyncClient, register: RegisterFn
    ) -> None:
        await register(email="login@devconnector.io", password="abcdef")

        wrong_password = await client.post(
            "/api/auth", json={"email": "login@devconnector.io", "password": "wrong1"}
        )
        unknown_email = await client.post(
            "/api/auth", json={"email": "ghost@devconnector.io", "password": "abcdef"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["msg"] == "Invalid credentials"

    async def test_login_validation(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth", json={"email": "bad", "password": ""})

        assert response.status_code == 400
        assert {error["msg"] for error in response.json()["errors"]} == {
            "Please include a valid email",
            "Password is required",
        }
