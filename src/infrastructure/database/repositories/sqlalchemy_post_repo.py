"""SQLAlchemy implementation of Post repository."""

from collections import defaultdict
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import PostCommentModel, PostLikeModel, PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID, with likes and comments loaded."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        posts = await self._assemble([model])
        return posts[0]

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = select(PostModel).order_by(PostModel.created_at.desc())
        result = await self._session.execute(stmt)
        return await self._assemble(list(result.scalars()))

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            created_at=post.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model, likes=[], comments=[])

    async def delete(self, id: UUID) -> bool:
        """Delete a post with its likes and comments."""
        await self._session.execute(delete(PostLikeModel).where(PostLikeModel.post_id == id))
        await self._session.execute(
            delete(PostCommentModel).where(PostCommentModel.post_id == id)
        )
        result = await self._session.execute(delete(PostModel).where(PostModel.id == id))
        await self._session.flush()
        return bool(result.rowcount)

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post authored by a user, plus the user's likes and comments."""
        post_ids = select(PostModel.id).where(PostModel.user_id == user_id)
        await self._session.execute(
            delete(PostLikeModel).where(
                (PostLikeModel.post_id.in_(post_ids)) | (PostLikeModel.user_id == user_id)
            )
        )
        await self._session.execute(
            delete(PostCommentModel).where(
                (PostCommentModel.post_id.in_(post_ids))
                | (PostCommentModel.user_id == user_id)
            )
        )
        result = await self._session.execute(
            delete(PostModel).where(PostModel.user_id == user_id)
        )
        await self._session.flush()
        return result.rowcount or 0

    async def get_likes(self, post_id: UUID) -> list[Like]:
        """Get likes for a post, newest first."""
        stmt = (
            select(PostLikeModel)
            .where(PostLikeModel.post_id == post_id)
            .order_by(PostLikeModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [Like(user_id=m.user_id, created_at=m.created_at) for m in result.scalars()]

    async def add_like(self, post_id: UUID, like: Like) -> None:
        """Insert a like. A duplicate violates the composite primary key."""
        self._session.add(
            PostLikeModel(post_id=post_id, user_id=like.user_id, created_at=like.created_at)
        )
        await self._session.flush()

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete a user's like."""
        stmt = delete(PostLikeModel).where(
            PostLikeModel.post_id == post_id,
            PostLikeModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def get_comments(self, post_id: UUID) -> list[Comment]:
        """Get comments for a post, newest first."""
        stmt = (
            select(PostCommentModel)
            .where(PostCommentModel.post_id == post_id)
            .order_by(PostCommentModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._comment_to_entity(m) for m in result.scalars()]

    async def add_comment(self, post_id: UUID, comment: Comment) -> None:
        """Insert a comment."""
        self._session.add(
            PostCommentModel(
                id=comment.id,
                post_id=post_id,
                user_id=comment.user_id,
                text=comment.text,
                name=comment.name,
                avatar=comment.avatar,
                created_at=comment.created_at,
            )
        )
        await self._session.flush()

    async def remove_comment(self, post_id: UUID, comment_id: UUID) -> bool:
        """Delete a comment scoped to its post."""
        stmt = delete(PostCommentModel).where(
            PostCommentModel.id == comment_id,
            PostCommentModel.post_id == post_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _assemble(self, models: list[PostModel]) -> list[Post]:
        """Batch-load likes and comments for the given posts."""
        if not models:
            return []
        post_ids = [model.id for model in models]

        likes_stmt = (
            select(PostLikeModel)
            .where(PostLikeModel.post_id.in_(post_ids))
            .order_by(PostLikeModel.created_at.desc())
        )
        comments_stmt = (
            select(PostCommentModel)
            .where(PostCommentModel.post_id.in_(post_ids))
            .order_by(PostCommentModel.created_at.desc())
        )

        likes: dict[UUID, list[Like]] = defaultdict(list)
        for like in (await self._session.execute(likes_stmt)).scalars():
            likes[like.post_id].append(Like(user_id=like.user_id, created_at=like.created_at))

        comments: dict[UUID, list[Comment]] = defaultdict(list)
        for comment in (await self._session.execute(comments_stmt)).scalars():
            comments[comment.post_id].append(self._comment_to_entity(comment))

        return [
            self._to_entity(
                model,
                likes=likes.get(model.id, []),
                comments=comments.get(model.id, []),
            )
            for model in models
        ]

    def _to_entity(
        self, model: PostModel, likes: list[Like], comments: list[Comment]
    ) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            likes=likes,
            comments=comments,
            created_at=model.created_at,
        )

    def _comment_to_entity(self, model: PostCommentModel) -> Comment:
        return Comment(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            created_at=model.created_at,
        )
