"""Profile API routes."""

from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentUser
from api.dependencies.ids import EducationId, ExperienceId, ProfileUserId
from api.dependencies.services import get_profile_service
from api.schemas.common import MessageResponse
from api.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileOwnerResponse,
    ProfileResponse,
    ProfileUpsert,
    SocialLinks,
)
from core.exceptions import ProfileNotFoundError
from domain.entities.profile import SOCIAL_NETWORKS, Education, Experience, Profile, parse_skills
from domain.services.profile_service import PROFILE_FIELDS, ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_response(profile: Profile) -> ProfileResponse:
    if profile.owner is None:
        # Profiles are only read joined to their user
        raise ProfileNotFoundError()
    return ProfileResponse(
        id=profile.id,
        user=ProfileOwnerResponse(
            id=profile.owner.id,
            name=profile.owner.name,
            avatar=profile.owner.avatar,
        ),
        status=profile.status,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        githubusername=profile.githubusername,
        skills=profile.skills,
        social=SocialLinks(**profile.social),
        experience=[
            ExperienceResponse(
                id=exp.id,
                title=exp.title,
                company=exp.company,
                location=exp.location,
                from_date=exp.from_date,
                to_date=exp.to_date,
                current=exp.current,
                description=exp.description,
            )
            for exp in profile.experience
        ],
        education=[
            EducationResponse(
                id=edu.id,
                school=edu.school,
                degree=edu.degree,
                fieldofstudy=edu.fieldofstudy,
                from_date=edu.from_date,
                to_date=edu.to_date,
                current=edu.current,
                description=edu.description,
            )
            for edu in profile.education
        ],
        date=profile.created_at,
    )


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user's profile",
    responses={404: {"description": "There is no profile for this user"}},
)
async def get_my_profile(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    profile = await service.get_for_user(user.id)
    return _to_response(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update user profile",
    responses={400: {"description": "Status or skills missing"}},
)
async def upsert_profile(
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the caller's profile, or replace the fields sent in the request."""
    profile = await service.upsert(
        user_id=user.id,
        status=body.status,
        skills=parse_skills(body.skills),
        fields=body.model_dump(include=set(PROFILE_FIELDS), exclude_unset=True),
        social=body.model_dump(include=set(SOCIAL_NETWORKS), exclude_unset=True),
    )
    return _to_response(profile)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="Get all profiles",
)
async def list_profiles(
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """List every profile (public)."""
    profiles = await service.list_all()
    return [_to_response(profile) for profile in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get profile by user ID",
    responses={404: {"description": "Profile not found"}},
)
async def get_profile_by_user(
    user_id: ProfileUserId,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get any user's profile (public)."""
    profile = await service.get_by_user_id(user_id)
    return _to_response(profile)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete profile, user and posts",
)
async def delete_account(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's posts, profile and account."""
    await service.delete_account(user.id)
    return MessageResponse(msg="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add profile experience",
    responses={
        400: {"description": "Required fields missing"},
        404: {"description": "There is no profile for this user"},
    },
)
async def add_experience(
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry to the top of the caller's profile."""
    profile = await service.add_experience(
        user.id,
        Experience(
            title=body.title,
            company=body.company,
            location=body.location,
            from_date=body.from_date,
            to_date=body.to_date,
            current=body.current,
            description=body.description,
        ),
    )
    return _to_response(profile)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Delete experience from profile",
    responses={404: {"description": "Profile or experience not found"}},
)
async def delete_experience(
    exp_id: ExperienceId,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry from the caller's profile."""
    profile = await service.remove_experience(user.id, exp_id)
    return _to_response(profile)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add profile education",
    responses={
        400: {"description": "Required fields missing"},
        404: {"description": "There is no profile for this user"},
    },
)
async def add_education(
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry to the top of the caller's profile."""
    profile = await service.add_education(
        user.id,
        Education(
            school=body.school,
            degree=body.degree,
            fieldofstudy=body.fieldofstudy,
            from_date=body.from_date,
            to_date=body.to_date,
            current=body.current,
            description=body.description,
        ),
    )
    return _to_response(profile)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Delete education from profile",
    responses={404: {"description": "Profile or education not found"}},
)
async def delete_education(
    edu_id: EducationId,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry from the caller's profile."""
    profile = await service.remove_education(user.id, edu_id)
    return _to_response(profile)


@router.get(
    "/github/{username}",
    summary="Get user repos from GitHub",
    responses={404: {"description": "No Github profile found"}},
)
async def get_github_repos(
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> list[dict[str, Any]]:
    """Proxy a developer's five oldest public GitHub repositories."""
    return await service.get_github_repos(username)
