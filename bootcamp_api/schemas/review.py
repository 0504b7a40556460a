"""Review schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bootcamp_api.schemas.common import BootcampRef, OwnerSummary
from bootcamp_api.utils.constants import MAX_RATING, MIN_RATING


class ReviewCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    comment: str = Field(..., min_length=1)
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)


class ReviewUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    comment: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=MIN_RATING, le=MAX_RATING)


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    comment: str
    rating: int
    bootcamp_id: UUID
    user_id: UUID
    author: Optional[OwnerSummary] = None
    bootcamp: Optional[BootcampRef] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
