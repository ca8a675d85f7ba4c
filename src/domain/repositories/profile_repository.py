"""Profile repository protocol."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from domain.entities.profile import Education, Experience, Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile aggregates.

    Returned profiles carry their experience/education entries (newest
    first) and an ``owner`` snapshot of the user's name and avatar.
    """

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get all profiles."""
        ...

    async def upsert(self, profile: Profile, columns: Iterable[str]) -> Profile:
        """Insert the profile, or overwrite only ``columns`` on the user's existing one.

        Must be one atomic statement keyed on the owning user.
        """
        ...

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete a user's profile and all of its entries."""
        ...

    async def add_experience(self, profile_id: UUID, experience: Experience) -> None:
        """Insert an experience entry."""
        ...

    async def remove_experience(self, profile_id: UUID, experience_id: UUID) -> bool:
        """Delete an experience entry; False when it is not on this profile."""
        ...

    async def add_education(self, profile_id: UUID, education: Education) -> None:
        """Insert an education entry."""
        ...

    async def remove_education(self, profile_id: UUID, education_id: UUID) -> bool:
        """Delete an education entry; False when it is not on this profile."""
        ...
