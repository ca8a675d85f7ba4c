"""Profile service layer with business logic."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, List, Optional, Protocol
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.profile import (
    SOCIAL_NETWORKS,
    Education,
    Experience,
    Profile,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

PROFILE_FIELDS = ("company", "website", "location", "bio", "githubusername")


class IGitHubClient(Protocol):
    """Lists a GitHub user's public repositories."""

    async def get_user_repos(self, username: str, limit: int = 5) -> list[dict[str, Any]]:
        ...


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        github_client: Optional[IGitHubClient] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._github_client = github_client

    async def get_for_user(self, user_id: UUID) -> Profile:
        """Get the authenticated user's own profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError("There is no profile for this user")
            return profile

    async def get_by_user_id(self, user_id: UUID) -> Profile:
        """Get any user's profile (public)."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError()
            return profile

    async def list_all(self) -> List[Profile]:
        """Get every profile (public)."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def upsert(
        self,
        user_id: UUID,
        status: str,
        skills: List[str],
        fields: Optional[Mapping[str, Optional[str]]] = None,
        social: Optional[Mapping[str, Optional[str]]] = None,
    ) -> Profile:
        """Create the user's profile, or update it in place.

        Only the keys present in ``fields`` and ``social`` are written; a
        falsy social value removes that link.
        """
        fields = fields or {}
        social = social or {}
        for key in fields:
            if key not in PROFILE_FIELDS:
                raise ValueError(f"Unknown profile field: {key}")
        for network in social:
            if network not in SOCIAL_NETWORKS:
                raise ValueError(f"Unknown social network: {network}")

        columns = ["status", "skills", "updated_at", *fields]
        if social:
            columns.append("social")

        async with self._uow_factory() as uow:
            existing = await uow.profiles.get_by_user(user_id)
            profile = existing or Profile(user_id=user_id, status=status)

            profile.status = status
            profile.skills = list(skills)
            for key, value in fields.items():
                setattr(profile, key, value)
            for network, url in social.items():
                if url:
                    profile.social[network] = url
                else:
                    profile.social.pop(network, None)
            profile.updated_at = datetime.utcnow()

            saved = await uow.profiles.upsert(profile, columns)
            await uow.commit()

        logger.info(
            "profile_updated" if existing else "profile_created",
            user_id=str(user_id),
        )
        return saved  # type: ignore[no-any-return]

    async def add_experience(self, user_id: UUID, experience: Experience) -> Profile:
        """Add an experience entry; it becomes the first in the list."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            await uow.profiles.add_experience(profile.id, experience)
            updated = await self._require_profile(uow, user_id)
            await uow.commit()
            return updated

    async def remove_experience(self, user_id: UUID, experience_id: UUID) -> Profile:
        """Remove an experience entry from the user's own profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            removed = await uow.profiles.remove_experience(profile.id, experience_id)
            if not removed:
                raise ExperienceNotFoundError(str(experience_id))
            updated = await self._require_profile(uow, user_id)
            await uow.commit()
            return updated

    async def add_education(self, user_id: UUID, education: Education) -> Profile:
        """Add an education entry; it becomes the first in the list."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            await uow.profiles.add_education(profile.id, education)
            updated = await self._require_profile(uow, user_id)
            await uow.commit()
            return updated

    async def remove_education(self, user_id: UUID, education_id: UUID) -> Profile:
        """Remove an education entry from the user's own profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            removed = await uow.profiles.remove_education(profile.id, education_id)
            if not removed:
                raise EducationNotFoundError(str(education_id))
            updated = await self._require_profile(uow, user_id)
            await uow.commit()
            return updated

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user's posts, profile and identity together."""
        async with self._uow_factory() as uow:
            deleted_posts = await uow.posts.delete_all_for_user(user_id)
            await uow.profiles.delete_for_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id), deleted_posts=deleted_posts)

    async def get_github_repos(self, username: str) -> list[dict[str, Any]]:
        """List a GitHub user's five oldest public repositories."""
        if self._github_client is None:
            raise RuntimeError("ProfileService has no GitHub client configured")
        return await self._github_client.get_user_repos(username, limit=5)

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError("There is no profile for this user")
        return profile
