"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from bootcamp_api.core.security import Role
from bootcamp_api.schemas.common import ApiResponse
from bootcamp_api.schemas.user import UserResponse, check_password, check_username


class RegisterRequest(BaseModel):
    """Register request schema. New accounts always get the "user" role."""

    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def username_valid(cls, v):
        return check_username(v)

    @field_validator("password")
    @classmethod
    def password_strong(cls, v):
        return check_password(v)


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    password: str

    @field_validator("password")
    @classmethod
    def password_strong(cls, v):
        return check_password(v)


class UpdatePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def password_strong(cls, v):
        return check_password(v)


class RoleUpdateRequest(BaseModel):
    role: Role


class AuthResponse(ApiResponse[UserResponse]):
    """Envelope carrying a freshly signed session token."""

    token: str
