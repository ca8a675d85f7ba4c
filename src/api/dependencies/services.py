"""Dependency injection factories for services and their collaborators."""

from functools import lru_cache
from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies.auth import get_auth_provider
from core.config import Settings, get_settings
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from domain.services.user_service import UserService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password import PasswordHasher
from infrastructure.database.session import get_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.github.client import GitHubClient


def get_uow_factory(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@lru_cache
def _password_hasher(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PasswordHasher:
    """Get the shared password hasher for the configured bcrypt cost."""
    return _password_hasher(settings.bcrypt_rounds)


def get_github_client(
    settings: Annotated[Settings, Depends(get_settings)],
) -> GitHubClient:
    """Get a GitHub client configured from settings."""
    return GitHubClient(
        base_url=settings.github_api_url,
        client_id=settings.github_client_id,
        client_secret=settings.github_client_secret,
        timeout=settings.github_timeout_seconds,
    )


def get_user_service(
    uow_factory: Annotated[Callable[[], SQLAlchemyUnitOfWork], Depends(get_uow_factory)],
    auth_provider: Annotated[JWTAuthProvider, Depends(get_auth_provider)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    """Get User service instance."""
    return UserService(
        uow_factory,
        auth_provider=auth_provider,
        password_hasher=password_hasher,
    )


def get_profile_service(
    uow_factory: Annotated[Callable[[], SQLAlchemyUnitOfWork], Depends(get_uow_factory)],
    github_client: Annotated[GitHubClient, Depends(get_github_client)],
) -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(uow_factory, github_client=github_client)


def get_post_service(
    uow_factory: Annotated[Callable[[], SQLAlchemyUnitOfWork], Depends(get_uow_factory)],
) -> PostService:
    """Get Post service instance."""
    return PostService(uow_factory)
