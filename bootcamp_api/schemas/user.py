"""User schemas (self-service and administration)."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from bootcamp_api.core.security import Role
from bootcamp_api.schemas.profile import ProfileResponse
from bootcamp_api.utils.validators import validate_password_strength, validate_username


def check_username(value: Optional[str]) -> Optional[str]:
    if value is not None:
        errors = validate_username(value)
        if errors:
            raise ValueError(errors[0])
    return value


def check_password(value: Optional[str]) -> Optional[str]:
    if value is not None:
        is_strong, _ = validate_password_strength(value)
        if not is_strong:
            raise ValueError(
                "Password must be at least 8 characters long and contain at least one "
                "uppercase letter, one lowercase letter, one number, and one special character"
            )
    return value


class UserResponse(BaseModel):
    """User response schema. Never carries the password hash or reset token."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    role: str
    profile: Optional[ProfileResponse] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserCreate(BaseModel):
    """Admin create user request schema."""

    username: str
    email: EmailStr
    password: str
    role: Role = Role.USER

    @field_validator("username")
    @classmethod
    def username_valid(cls, v):
        return check_username(v)

    @field_validator("password")
    @classmethod
    def password_strong(cls, v):
        return check_password(v)


class UserUpdate(BaseModel):
    """Admin update user request schema (partial)."""

    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("username")
    @classmethod
    def username_valid(cls, v):
        return check_username(v)

    @field_validator("password")
    @classmethod
    def password_strong(cls, v):
        return check_password(v)
