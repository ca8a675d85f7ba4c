"""Pydantic schemas for Post API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from api.schemas.common import require_present


class PostCreate(BaseModel):
    """Schema for creating a post."""

    text: str = Field(None, validate_default=True)

    @field_validator("text", mode="before")
    @classmethod
    def check_text(cls, v: Any) -> Any:
        return require_present(v, "Text is required")


class CommentCreate(PostCreate):
    """Schema for commenting on a post."""


class LikeResponse(BaseModel):
    """One like on a post."""

    user: UUID


class CommentResponse(BaseModel):
    """Schema for a comment."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    """Schema for a post with likes and comments."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    likes: list[LikeResponse]
    comments: list[CommentResponse]
    date: datetime
