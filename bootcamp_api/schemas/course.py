"""Course schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bootcamp_api.schemas.common import BootcampRef


def clean_prerequisites(value: Optional[List[str]]) -> Optional[List[str]]:
    """Trim prerequisite titles and reject blank ones, keeping order."""
    if value is None:
        return value
    titles = [title.strip() for title in value]
    if any(not title for title in titles):
        raise ValueError("Please add a prerequisite title")
    return titles


class CourseCreate(BaseModel):
    """Create course request schema."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    duration: int = Field(..., gt=0, description="Length of the course in hours")
    instructor: str = Field(..., min_length=1, max_length=100)
    prerequisites: List[str] = Field(default_factory=list)

    @field_validator("prerequisites")
    @classmethod
    def prerequisites_valid(cls, v):
        return clean_prerequisites(v)


class CourseUpdate(BaseModel):
    """Update course request schema (partial)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    duration: Optional[int] = Field(None, gt=0)
    instructor: Optional[str] = Field(None, min_length=1, max_length=100)
    prerequisites: Optional[List[str]] = None

    @field_validator("prerequisites")
    @classmethod
    def prerequisites_valid(cls, v):
        return clean_prerequisites(v)


class CourseSummary(BaseModel):
    """Course listing embedded in bootcamp responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    duration: int
    instructor: str


class CourseResponse(BaseModel):
    """Course response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    duration: int
    instructor: str
    prerequisites: List[str] = []
    bootcamp_id: UUID
    user_id: UUID
    bootcamp: Optional[BootcampRef] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
