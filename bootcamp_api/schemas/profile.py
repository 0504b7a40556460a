"""Profile schemas."""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileCreate(BaseModel):
    """Create profile request schema."""

    model_config = ConfigDict(str_strip_whitespace=True)

    firstname: str = Field(..., min_length=1, max_length=100)
    lastname: str = Field(..., min_length=1, max_length=100)
    gender: Literal["male", "female"]
    phone: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)


class ProfileUpdate(BaseModel):
    """Update profile request schema (partial)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    firstname: Optional[str] = Field(None, min_length=1, max_length=100)
    lastname: Optional[str] = Field(None, min_length=1, max_length=100)
    gender: Optional[Literal["male", "female"]] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    country: Optional[str] = Field(None, min_length=1, max_length=100)


class ProfileResponse(BaseModel):
    """Profile response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    firstname: str
    lastname: str
    gender: str
    phone: str
    country: str
    created_at: datetime
    updated_at: Optional[datetime] = None
