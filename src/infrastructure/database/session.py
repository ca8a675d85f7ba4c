"""Database engine and session factory."""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    return create_async_engine(
        config.async_database_url,
        echo=config.debug,
        pool_pre_ping=True,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose sessions keep loaded state after commit."""
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """The session factory ``create_app`` attached to the running application."""
    return request.app.state.session_factory  # type: ignore[no-any-return]


async def get_async_session(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for request handlers that query the database directly."""
    async with session_factory() as session:
        yield session
