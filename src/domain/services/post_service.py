"""Post service layer with business logic."""

from typing import Callable, List
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.database.dialects import is_unique_violation

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's current name and avatar."""
        async with self._uow_factory() as uow:
            author = await uow.users.get(user_id)
            if not author:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()
            return created  # type: ignore[no-any-return]

    async def list_all(self) -> List[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.user_id != user_id:
                raise AuthorizationError()

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id))

    async def like(self, post_id: UUID, user_id: UUID) -> List[Like]:
        """Like a post. Returns the updated likes, newest first."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(str(post_id))

            try:
                await uow.posts.add_like(post_id, Like(user_id=user_id))
            except IntegrityError as exc:
                # A concurrent like for the same pair won the insert
                await uow.rollback()
                if is_unique_violation(exc):
                    raise PostAlreadyLikedError(str(post_id)) from exc
                raise
            likes = await uow.posts.get_likes(post_id)
            await uow.commit()
            return likes  # type: ignore[no-any-return]

    async def unlike(self, post_id: UUID, user_id: UUID) -> List[Like]:
        """Remove the caller's like. Returns the updated likes."""
        async with self._uow_factory() as uow:
            await self._require_post(uow, post_id)
            removed = await uow.posts.remove_like(post_id, user_id)
            if not removed:
                raise PostNotLikedError(str(post_id))

            likes = await uow.posts.get_likes(post_id)
            await uow.commit()
            return likes  # type: ignore[no-any-return]

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> List[Comment]:
        """Comment on a post. Returns the updated comments, newest first."""
        async with self._uow_factory() as uow:
            await self._require_post(uow, post_id)
            author = await uow.users.get(user_id)
            if not author:
                raise UserNotFoundError(str(user_id))

            comment = Comment(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            await uow.posts.add_comment(post_id, comment)
            comments = await uow.posts.get_comments(post_id)
            await uow.commit()
            return comments  # type: ignore[no-any-return]

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> List[Comment]:
        """Delete a comment. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != user_id:
                raise AuthorizationError()

            await uow.posts.remove_comment(post_id, comment_id)
            comments = await uow.posts.get_comments(post_id)
            await uow.commit()
            return comments  # type: ignore[no-any-return]

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post
