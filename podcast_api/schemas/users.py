"""Request/response schemas for user registration, login and profiles."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from podcast_api.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    check_password_length,
)
from podcast_api.models.user import UserRole
from podcast_api.schemas.common import CoreOutput


class UserOut(BaseModel):
    """Public view of a user; the password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateUserInput(BaseModel):
    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role: UserRole = Field(..., description="Listener or Host")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_length(v)


class CreateUserOutput(CoreOutput):
    pass


class LoginInput(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_length(v)


class LoginOutput(CoreOutput):
    """Signed identity token on success; send it back in the X-JWT header."""

    token: str | None = None


class SeeProfileOutput(CoreOutput):
    user: UserOut | None = None


class EditProfileInput(BaseModel):
    """Fields left out, null, or empty are not changed."""

    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if not v:
            return v
        return check_password_length(v)


class EditProfileOutput(CoreOutput):
    pass
