"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


@dataclass
class Experience:
    """A job entry on a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Education:
    """A school entry on a profile."""

    school: str
    degree: str
    fieldofstudy: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class ProfileOwner:
    """Read-only snapshot of the identity that owns a profile."""

    id: UUID
    name: str
    avatar: str | None = None


@dataclass
class Profile:
    """Domain entity for a user's developer profile.

    Experience and education are kept newest-first.
    """

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = field(default_factory=list)
    social: dict[str, str] = field(default_factory=dict)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    owner: ProfileOwner | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string into trimmed, non-empty skills."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]
