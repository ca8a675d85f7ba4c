"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Comment, Like, Post


class IPostRepository(Protocol):
    """Repository interface for Post aggregates."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID, with likes and comments loaded."""
        ...

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post with its likes and comments."""
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post authored by a user. Returns the count removed."""
        ...

    async def get_likes(self, post_id: UUID) -> list[Like]:
        """Get likes for a post, newest first."""
        ...

    async def add_like(self, post_id: UUID, like: Like) -> None:
        """Insert a like. The (post, user) pair is unique."""
        ...

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete a user's like; False when there was none."""
        ...

    async def get_comments(self, post_id: UUID) -> list[Comment]:
        """Get comments for a post, newest first."""
        ...

    async def add_comment(self, post_id: UUID, comment: Comment) -> None:
        """Insert a comment."""
        ...

    async def remove_comment(self, post_id: UUID, comment_id: UUID) -> bool:
        """Delete a comment; False when it is not on this post."""
        ...
