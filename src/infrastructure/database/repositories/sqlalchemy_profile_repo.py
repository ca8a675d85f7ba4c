"""SQLAlchemy implementation of Profile repository."""

from collections import defaultdict
from collections.abc import Iterable
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import Education, Experience, Profile, ProfileOwner
from infrastructure.database.dialects import conflict_insert
from infrastructure.database.models import (
    EducationModel,
    ExperienceModel,
    ProfileModel,
    UserModel,
)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user, with entries and owner snapshot."""
        stmt = (
            select(ProfileModel, UserModel)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .where(ProfileModel.user_id == user_id)
            # Reload rows a conflict update may have changed under the identity map
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if not row:
            return None

        profiles = await self._assemble([(row[0], row[1])])
        return profiles[0]

    async def get_all(self) -> list[Profile]:
        """Get all profiles."""
        stmt = (
            select(ProfileModel, UserModel)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .order_by(ProfileModel.created_at)
        )
        result = await self._session.execute(stmt)
        return await self._assemble([(profile, user) for profile, user in result])

    async def upsert(self, profile: Profile, columns: Iterable[str]) -> Profile:
        """Insert the user's profile, or overwrite ``columns`` on the existing one.

        A single INSERT ... ON CONFLICT (user_id) DO UPDATE, so two first-time
        submissions for the same user converge on one row.
        """
        stmt = conflict_insert(self._session, ProfileModel).values(
            id=profile.id,
            user_id=profile.user_id,
            created_at=profile.created_at,
            **self._values(profile),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ProfileModel.user_id],
            set_={column: stmt.excluded[column] for column in columns},
        )
        await self._session.execute(stmt)

        saved = await self.get_by_user(profile.user_id)
        if saved is None:
            raise ProfileNotFoundError()
        return saved

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete a user's profile and all of its entries."""
        stmt = select(ProfileModel.id).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        profile_id = result.scalar_one_or_none()
        if profile_id is None:
            return False

        await self._session.execute(
            delete(ExperienceModel).where(ExperienceModel.profile_id == profile_id)
        )
        await self._session.execute(
            delete(EducationModel).where(EducationModel.profile_id == profile_id)
        )
        await self._session.execute(delete(ProfileModel).where(ProfileModel.id == profile_id))
        await self._session.flush()
        return True

    async def add_experience(self, profile_id: UUID, experience: Experience) -> None:
        """Insert an experience entry."""
        self._session.add(
            ExperienceModel(
                id=experience.id,
                profile_id=profile_id,
                title=experience.title,
                company=experience.company,
                location=experience.location,
                from_date=experience.from_date,
                to_date=experience.to_date,
                current=experience.current,
                description=experience.description,
                created_at=experience.created_at,
            )
        )
        await self._session.flush()

    async def remove_experience(self, profile_id: UUID, experience_id: UUID) -> bool:
        """Delete an experience entry scoped to its profile."""
        stmt = delete(ExperienceModel).where(
            ExperienceModel.id == experience_id,
            ExperienceModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def add_education(self, profile_id: UUID, education: Education) -> None:
        """Insert an education entry."""
        self._session.add(
            EducationModel(
                id=education.id,
                profile_id=profile_id,
                school=education.school,
                degree=education.degree,
                fieldofstudy=education.fieldofstudy,
                from_date=education.from_date,
                to_date=education.to_date,
                current=education.current,
                description=education.description,
                created_at=education.created_at,
            )
        )
        await self._session.flush()

    async def remove_education(self, profile_id: UUID, education_id: UUID) -> bool:
        """Delete an education entry scoped to its profile."""
        stmt = delete(EducationModel).where(
            EducationModel.id == education_id,
            EducationModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _assemble(
        self, rows: list[tuple[ProfileModel, UserModel]]
    ) -> list[Profile]:
        """Batch-load entries for the given profiles and build entities."""
        if not rows:
            return []
        profile_ids = [profile.id for profile, _ in rows]

        exp_stmt = (
            select(ExperienceModel)
            .where(ExperienceModel.profile_id.in_(profile_ids))
            .order_by(ExperienceModel.created_at.desc())
        )
        edu_stmt = (
            select(EducationModel)
            .where(EducationModel.profile_id.in_(profile_ids))
            .order_by(EducationModel.created_at.desc())
        )

        experience: dict[UUID, list[Experience]] = defaultdict(list)
        for model in (await self._session.execute(exp_stmt)).scalars():
            experience[model.profile_id].append(self._experience_to_entity(model))

        education: dict[UUID, list[Education]] = defaultdict(list)
        for model in (await self._session.execute(edu_stmt)).scalars():
            education[model.profile_id].append(self._education_to_entity(model))

        return [
            self._to_entity(
                profile,
                owner=ProfileOwner(id=user.id, name=user.name, avatar=user.avatar),
                experience=experience.get(profile.id, []),
                education=education.get(profile.id, []),
            )
            for profile, user in rows
        ]

    def _values(self, entity: Profile) -> dict[str, Any]:
        """Column values for the entity's scalar fields."""
        return {
            "company": entity.company,
            "website": entity.website,
            "location": entity.location,
            "bio": entity.bio,
            "status": entity.status,
            "githubusername": entity.githubusername,
            "skills": list(entity.skills),
            "social": dict(entity.social),
            "updated_at": entity.updated_at,
        }

    def _to_entity(
        self,
        model: ProfileModel,
        owner: ProfileOwner,
        experience: list[Experience],
        education: list[Education],
    ) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            githubusername=model.githubusername,
            skills=list(model.skills or []),
            social=dict(model.social or {}),
            experience=experience,
            education=education,
            owner=owner,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _experience_to_entity(self, model: ExperienceModel) -> Experience:
        return Experience(
            id=model.id,
            title=model.title,
            company=model.company,
            location=model.location,
            from_date=model.from_date,
            to_date=model.to_date,
            current=model.current,
            description=model.description,
            created_at=model.created_at,
        )

    def _education_to_entity(self, model: EducationModel) -> Education:
        return Education(
            id=model.id,
            school=model.school,
            degree=model.degree,
            fieldofstudy=model.fieldofstudy,
            from_date=model.from_date,
            to_date=model.to_date,
            current=model.current,
            description=model.description,
            created_at=model.created_at,
        )
