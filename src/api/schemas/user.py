"""Pydantic schemas for registration, login and identity responses."""

from datetime import datetime
from typing import Any
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.schemas.common import require_present

EMAIL_MESSAGE = "Please include a valid email"


def _check_email(value: Any) -> str:
    email = require_present(value, EMAIL_MESSAGE)
    if not isinstance(email, str):
        raise ValueError(EMAIL_MESSAGE)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(EMAIL_MESSAGE) from exc
    return email


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: str = Field(None, validate_default=True)
    email: str = Field(None, validate_default=True)
    password: str = Field(None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v: Any) -> Any:
        return require_present(v, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> str:
        return _check_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v: Any) -> Any:
        if not isinstance(v, str) or len(v) < 6:
            raise ValueError("Please enter a password with 6 or more characters")
        return v


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: str = Field(None, validate_default=True)
    password: str = Field(None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> str:
        return _check_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v: Any) -> Any:
        if v is None or v == "":
            raise ValueError("Password is required")
        return v


class TokenResponse(BaseModel):
    """Session token issued on registration or login."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}}
    )

    token: str


class UserResponse(BaseModel):
    """Authenticated identity. Never includes the password hash."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "A",
                "email": "a@x.com",
                "avatar": "https://www.gravatar.com/avatar/...?s=200&r=pg&d=mm",
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    avatar: str | None = None
    date: datetime
