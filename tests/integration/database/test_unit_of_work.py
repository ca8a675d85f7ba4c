"""Integration tests for SQLAlchemyUnitOfWork and the repositories it exposes."""

from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import PostAlreadyLikedError, UserAlreadyExistsError
from domain.entities.post import Like, Post
from domain.entities.profile import Experience, Profile
from domain.entities.user import User
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from domain.services.user_service import UserService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password import PasswordHasher
from infrastructure.database.repositories.sqlalchemy_post_repo import SQLAlchemyPostRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

PROFILE_COLUMNS = ["status", "skills", "updated_at"]


def _user(email: str = "repo@devconnector.io") -> User:
    return User(name="Repo", email=email, password="hash")


def _finish_other_request_after_first_read(
    monkeypatch: pytest.MonkeyPatch,
    repository: type,
    method: str,
    other_request: Callable[[], Awaitable[Any]],
) -> None:
    """Let ``other_request`` run to commit right after the first ``method`` read.

    The request that made the read then continues on stale state, as it would
    when two requests race between their check and their write.
    """
    original = getattr(repository, method)
    fired = False

    async def read_then_yield(self: Any, *args: Any, **kwargs: Any) -> Any:
        nonlocal fired
        result = await original(self, *args, **kwargs)
        if not fired:
            fired = True
            await other_request()
        return result

    monkeypatch.setattr(repository, method, read_then_yield)


async def _create_user(
    session_factory: async_sessionmaker[AsyncSession], user: User
) -> User:
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        created = await uow.users.create(user)
        await uow.commit()
    return created  # type: ignore[no-any-return]


class TestUnitOfWork:
    async def test_repositories_require_context(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        uow = SQLAlchemyUnitOfWork(session_factory)

        with pytest.raises(RuntimeError):
            uow.users

    async def test_rolls_back_on_error(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        user = _user()

        with pytest.raises(ValueError):
            async with SQLAlchemyUnitOfWork(session_factory) as uow:
                await uow.users.create(user)
                raise ValueError("abort")

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            assert await uow.users.get(user.id) is None

    async def test_commit_persists(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        user = _user()

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            await uow.users.create(user)
            await uow.commit()

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            found = await uow.users.get_by_email("REPO@devconnector.io")

        assert found is not None
        assert found.id == user.id


class TestPostRepository:
    async def test_remove_like_reports_whether_a_row_was_deleted(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        user = _user()
        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            await uow.users.create(user)
            post = await uow.posts.create(Post(user_id=user.id, text="Hi", name=user.name))
            await uow.posts.add_like(post.id, Like(user_id=user.id))

            assert await uow.posts.remove_like(post.id, user.id) is True
            assert await uow.posts.remove_like(post.id, user.id) is False


class TestProfileRepository:
    async def test_entries_are_scoped_to_their_profile(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        owner, stranger = _user("owner@devconnector.io"), _user("stranger@devconnector.io")
        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            await uow.users.create(owner)
            await uow.users.create(stranger)
            mine = await uow.profiles.upsert(
                Profile(user_id=owner.id, status="Dev"), PROFILE_COLUMNS
            )
            theirs = await uow.profiles.upsert(
                Profile(user_id=stranger.id, status="Dev"), PROFILE_COLUMNS
            )
            entry = Experience(title="Dev", company="Acme", from_date=date(2020, 1, 1))
            await uow.profiles.add_experience(mine.id, entry)

            assert await uow.profiles.remove_experience(theirs.id, entry.id) is False
            loaded = await uow.profiles.get_by_user(owner.id)

        assert loaded is not None
        assert [e.id for e in loaded.experience] == [entry.id]
        assert loaded.owner is not None
        assert loaded.owner.name == "Repo"

    async def test_upsert_keeps_one_row_per_user(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        user = await _create_user(session_factory, _user())

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            first = await uow.profiles.upsert(
                Profile(user_id=user.id, status="Junior", company="Acme"),
                [*PROFILE_COLUMNS, "company"],
            )
            await uow.commit()

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            second = await uow.profiles.upsert(
                Profile(user_id=user.id, status="Senior"), PROFILE_COLUMNS
            )
            await uow.commit()
            profiles = await uow.profiles.get_all()

        assert second.id == first.id
        assert second.status == "Senior"
        assert second.company == "Acme"
        assert len(profiles) == 1


class TestConcurrentWrites:
    async def test_interleaved_first_profile_submits_converge(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        user = await _create_user(session_factory, _user())
        service = ProfileService(lambda: SQLAlchemyUnitOfWork(session_factory))

        async def other_submit() -> None:
            await service.upsert(user.id, "Inner", ["Rust"], fields={"company": "Inner Co"})

        _finish_other_request_after_first_read(
            monkeypatch, SQLAlchemyProfileRepository, "get_by_user", other_submit
        )

        result = await service.upsert(user.id, "Outer", ["Go"], fields={"bio": "Outer bio"})

        assert result.status == "Outer"
        assert result.skills == ["Go"]
        assert result.bio == "Outer bio"
        assert result.company == "Inner Co"
        profiles = await service.list_all()
        assert [profile.id for profile in profiles] == [result.id]

    async def test_interleaved_likes_report_already_liked(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        user = await _create_user(session_factory, _user())
        service = PostService(lambda: SQLAlchemyUnitOfWork(session_factory))
        post = await service.create(user.id, "Hello")

        async def other_like() -> None:
            await service.like(post.id, user.id)

        _finish_other_request_after_first_read(
            monkeypatch, SQLAlchemyPostRepository, "get", other_like
        )

        with pytest.raises(PostAlreadyLikedError):
            await service.like(post.id, user.id)

        stored = await service.get(post.id)
        assert [like.user_id for like in stored.likes] == [user.id]

    async def test_interleaved_registrations_report_duplicate(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        monkeypatch: pytest.MonkeyPatch,
        auth_provider: JWTAuthProvider,
        password_hasher: PasswordHasher,
    ) -> None:
        service = UserService(
            lambda: SQLAlchemyUnitOfWork(session_factory),
            auth_provider=auth_provider,
            password_hasher=password_hasher,
        )

        async def other_signup() -> None:
            await service.register("Bob", "same@devconnector.io", "secret123")

        _finish_other_request_after_first_read(
            monkeypatch, SQLAlchemyUserRepository, "get_by_email", other_signup
        )

        with pytest.raises(UserAlreadyExistsError):
            await service.register("Alice", "same@devconnector.io", "secret123")

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            stored = await uow.users.get_by_email("same@devconnector.io")
        assert stored is not None
        assert stored.name == "Bob"
