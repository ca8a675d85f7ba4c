"""Pytest configuration and fixtures."""

import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import Settings
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password import PasswordHasher
from infrastructure.database.models import Base
from infrastructure.github.client import GitHubClient


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SECRET_KEY = "test-secret-key"

GITHUB_REPOS = [
    {"id": 1, "name": "first-repo", "html_url": "https://github.com/octocat/first-repo"},
    {"id": 2, "name": "second-repo", "html_url": "https://github.com/octocat/second-repo"},
]


def github_handler(request: httpx.Request) -> httpx.Response:
    """Fake GitHub: ``octocat`` exists, every other user is unknown."""
    if request.url.path == "/users/octocat/repos":
        return httpx.Response(200, json=GITHUB_REPOS)
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: fixed secret, cheap bcrypt, fake GitHub host."""
    return Settings(
        app_env="test",
        jwt_secret_key=TEST_SECRET_KEY,
        bcrypt_rounds=4,
        github_api_url="https://github.test-api.invalid",
    )


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables, one per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Hasher with the minimum bcrypt cost to keep tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    test_settings: Settings,
    password_hasher: PasswordHasher,
) -> FastAPI:
    """
    Create the application wired to the test database.

    - Settings are replaced, so the token codec uses the test secret
    - Sessions, and every Unit of Work built on them, use the in-memory database
    - The GitHub client talks to a mock transport
    """
    from api.dependencies.services import get_github_client, get_password_hasher
    from core.config import get_settings
    from infrastructure.database.session import get_session_factory
    from main import create_app

    app = create_app(test_settings)

    def override_get_github_client() -> GitHubClient:
        return GitHubClient(
            base_url=test_settings.github_api_url,
            transport=httpx.MockTransport(github_handler),
        )

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher
    app.dependency_overrides[get_github_client] = override_get_github_client
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client against the wired application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


RegisterFn = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def register(client: AsyncClient) -> RegisterFn:
    """Register a user through the API and return its auth headers."""

    async def _register(
        name: str = "Alice",
        email: str = "alice@devconnector.io",
        password: str = "secret123",
    ) -> dict[str, str]:
        response = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"x-auth-token": response.json()["token"]}

    return _register


@pytest.fixture
async def auth_headers(register: RegisterFn) -> dict[str, str]:
    """Headers for a freshly registered user."""
    return await register()


@pytest.fixture
async def other_headers(register: RegisterFn) -> dict[str, str]:
    """Headers for a second registered user."""
    return await register(name="Bob", email="bob@devconnector.io")
