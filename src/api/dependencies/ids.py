"""Path identifier dependencies.

A path id that is not a valid UUID is reported exactly like an unknown
id, with the resource's not-found error.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from core.exceptions import (
    CommentNotFoundError,
    EducationNotFoundError,
    ExperienceNotFoundError,
    PostNotFoundError,
    ProfileNotFoundError,
)


def _parse_uuid(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


def get_post_id(post_id: str) -> UUID:
    parsed = _parse_uuid(post_id)
    if parsed is None:
        raise PostNotFoundError(post_id)
    return parsed


def get_comment_id(comment_id: str) -> UUID:
    parsed = _parse_uuid(comment_id)
    if parsed is None:
        raise CommentNotFoundError(comment_id)
    return parsed


def get_profile_user_id(user_id: str) -> UUID:
    parsed = _parse_uuid(user_id)
    if parsed is None:
        raise ProfileNotFoundError()
    return parsed


def get_experience_id(exp_id: str) -> UUID:
    parsed = _parse_uuid(exp_id)
    if parsed is None:
        raise ExperienceNotFoundError(exp_id)
    return parsed


def get_education_id(edu_id: str) -> UUID:
    parsed = _parse_uuid(edu_id)
    if parsed is None:
        raise EducationNotFoundError(edu_id)
    return parsed


PostId = Annotated[UUID, Depends(get_post_id)]
CommentId = Annotated[UUID, Depends(get_comment_id)]
ProfileUserId = Annotated[UUID, Depends(get_profile_user_id)]
ExperienceId = Annotated[UUID, Depends(get_experience_id)]
EducationId = Annotated[UUID, Depends(get_education_id)]
