"""Shared schemas: response envelope and small nested summaries."""

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard envelope for every JSON response."""

    success: bool = True
    count: Optional[int] = None
    message: Optional[str] = None
    data: Optional[T] = None


class ProfileName(BaseModel):
    """Name fields of a profile, embedded in owner/author summaries."""

    model_config = ConfigDict(from_attributes=True)

    firstname: str
    lastname: str


class OwnerSummary(BaseModel):
    """Public view of the user that owns or authored a resource."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    profile: Optional[ProfileName] = None


class BootcampRef(BaseModel):
    """Bootcamp reference embedded in course and review responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: Optional[str] = None
    description: str


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalise an incoming datetime to naive UTC (the stored form)."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
