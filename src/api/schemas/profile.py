"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from api.schemas.common import require_present, strip_or_none
from domain.entities.profile import parse_skills


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` is a comma-separated string. Fields left out of the request
    keep their stored value.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "Developer",
                "skills": "Python, FastAPI, PostgreSQL",
                "company": "Acme",
                "githubusername": "octocat",
                "twitter": "https://twitter.com/octocat",
            }
        }
    )

    status: str = Field(None, validate_default=True)
    skills: str = Field(None, validate_default=True)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> Any:
        return require_present(v, "Status is required")

    @field_validator("skills", mode="before")
    @classmethod
    def check_skills(cls, v: Any) -> Any:
        v = require_present(v, "Skills is required")
        if isinstance(v, str) and not parse_skills(v):
            raise ValueError("Skills is required")
        return v

    @field_validator(
        "company",
        "website",
        "location",
        "bio",
        "githubusername",
        "youtube",
        "twitter",
        "facebook",
        "linkedin",
        "instagram",
        mode="before",
    )
    @classmethod
    def trim(cls, v: Any) -> Any:
        return strip_or_none(v)


_EXPERIENCE_REQUIRED = {
    "title": "Title is required",
    "company": "Company is required",
    "from_date": "From date is required",
}


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(None, validate_default=True)
    company: str = Field(None, validate_default=True)
    location: str | None = None
    from_date: date = Field(None, alias="from", validate_default=True)
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @field_validator("title", "company", "from_date", mode="before")
    @classmethod
    def check_required(cls, v: Any, info: ValidationInfo) -> Any:
        return require_present(v, _EXPERIENCE_REQUIRED[info.field_name])

    @field_validator("location", "description", "to_date", mode="before")
    @classmethod
    def trim(cls, v: Any) -> Any:
        return strip_or_none(v)


_EDUCATION_REQUIRED = {
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of study is required",
    "from_date": "From date is required",
}


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: str = Field(None, validate_default=True)
    degree: str = Field(None, validate_default=True)
    fieldofstudy: str = Field(None, validate_default=True)
    from_date: date = Field(None, alias="from", validate_default=True)
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @field_validator("school", "degree", "fieldofstudy", "from_date", mode="before")
    @classmethod
    def check_required(cls, v: Any, info: ValidationInfo) -> Any:
        return require_present(v, _EDUCATION_REQUIRED[info.field_name])

    @field_validator("description", "to_date", mode="before")
    @classmethod
    def trim(cls, v: Any) -> Any:
        return strip_or_none(v)


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class ProfileOwnerResponse(BaseModel):
    """The profile owner's public identity."""

    id: UUID
    name: str
    avatar: str | None = None


class SocialLinks(BaseModel):
    """Social network URLs; absent networks are null."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ProfileResponse(BaseModel):
    """Schema for a profile with its owner and entries."""

    id: UUID
    user: ProfileOwnerResponse
    status: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str]
    social: SocialLinks
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    date: datetime
