"""Post API routes."""

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentUser
from api.dependencies.ids import CommentId, PostId
from api.dependencies.services import get_post_service
from api.schemas.common import MessageResponse
from api.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from domain.entities.post import Comment, Like, Post
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


def _likes(likes: list[Like]) -> list[LikeResponse]:
    return [LikeResponse(user=like.user_id) for like in likes]


def _comments(comments: list[Comment]) -> list[CommentResponse]:
    return [
        CommentResponse(
            id=comment.id,
            user=comment.user_id,
            text=comment.text,
            name=comment.name,
            avatar=comment.avatar,
            date=comment.created_at,
        )
        for comment in comments
    ]


def _to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        user=post.user_id,
        text=post.text,
        name=post.name,
        avatar=post.avatar,
        likes=_likes(post.likes),
        comments=_comments(post.comments),
        date=post.created_at,
    )


@router.post(
    "",
    response_model=PostResponse,
    summary="Create a post",
    responses={400: {"description": "Text is required"}},
)
async def create_post(
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post as the authenticated user."""
    post = await service.create(user.id, body.text)
    return _to_response(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="Get all posts",
)
async def list_posts(
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """List all posts, newest first."""
    posts = await service.list_all()
    return [_to_response(post) for post in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get post by ID",
    responses={404: {"description": "Post not found"}},
)
async def get_post(
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get a single post."""
    post = await service.get(post_id)
    return _to_response(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        401: {"description": "User not authorized"},
        404: {"description": "Post not found"},
    },
)
async def delete_post(
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only its author may do so."""
    await service.delete(post_id, user.id)
    return MessageResponse(msg="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={
        400: {"description": "Post already liked"},
        404: {"description": "Post not found"},
    },
)
async def like_post(
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Like a post and return its likes."""
    likes = await service.like(post_id, user.id)
    return _likes(likes)


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={
        400: {"description": "Post has not yet been liked"},
        404: {"description": "Post not found"},
    },
)
async def unlike_post(
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Remove the caller's like and return the remaining likes."""
    likes = await service.unlike(post_id, user.id)
    return _likes(likes)


@router.post(
    "/comment/{post_id}",
    response_model=list[CommentResponse],
    summary="Comment on a post",
    responses={
        400: {"description": "Text is required"},
        404: {"description": "Post not found"},
    },
)
async def add_comment(
    post_id: PostId,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Add a comment and return the post's comments."""
    comments = await service.add_comment(post_id, user.id, body.text)
    return _comments(comments)


@router.delete(
    "/{post_id}/comment/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        401: {"description": "User not authorized"},
        404: {"description": "Post or comment not found"},
    },
)
async def delete_comment(
    post_id: PostId,
    comment_id: CommentId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Delete one of the caller's comments and return the remaining comments."""
    comments = await service.remove_comment(post_id, comment_id, user.id)
    return _comments(comments)
