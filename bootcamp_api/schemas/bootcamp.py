"""
Pydantic schemas for Bootcamp APIs.

Field-level rules live here. Cross-field rules (price vs cost type, address
vs online delivery) are applied by ``bootcamp_api.services.lifecycle`` after
the request has been authorized.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from bootcamp_api.schemas.common import OwnerSummary, to_naive_utc
from bootcamp_api.schemas.course import CourseSummary
from bootcamp_api.utils.validators import validate_phone, validate_url

Level = Literal["Beginner", "Intermediate", "Advanced"]
Category = Literal[
    "Web Development",
    "Mobile Development",
    "UI/UX",
    "Data Science",
    "Business",
    "Other",
]
CostType = Literal["Free", "Paid"]
ElectronicMedium = Literal["zoom", "google meet", "other"]


class BootcampFieldsMixin(BaseModel):
    """Validators shared by create and update requests."""

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("phone", check_fields=False)
    @classmethod
    def phone_valid(cls, v):
        if v and not validate_phone(v):
            raise ValueError("Please use a valid phone number")
        return v

    @field_validator("website", "medium_link", check_fields=False)
    @classmethod
    def url_valid(cls, v):
        if v and not validate_url(v):
            raise ValueError("Please use a valid URL with HTTP or HTTPS")
        return v

    @field_validator("start_date", check_fields=False)
    @classmethod
    def start_date_utc(cls, v):
        return to_naive_utc(v)


class BootcampCreate(BootcampFieldsMixin):
    """Create bootcamp request schema."""

    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=255)
    duration: int = Field(..., ge=1, description="Length of the bootcamp in weeks")
    level: Level = "Beginner"
    category: List[Category] = Field(..., min_length=1)
    cost_type: CostType
    price: Optional[float] = Field(None, ge=0)
    start_date: datetime
    online_available: bool = False
    address: Optional[str] = Field(None, max_length=255)
    electronic_medium: Optional[ElectronicMedium] = None
    medium_link: Optional[str] = Field(None, max_length=500)


class BootcampUpdate(BootcampFieldsMixin):
    """Update bootcamp request schema (partial)."""

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=255)
    duration: Optional[int] = Field(None, ge=1)
    level: Optional[Level] = None
    category: Optional[List[Category]] = Field(None, min_length=1)
    cost_type: Optional[CostType] = None
    price: Optional[float] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    online_available: Optional[bool] = None
    address: Optional[str] = Field(None, max_length=255)
    electronic_medium: Optional[ElectronicMedium] = None
    medium_link: Optional[str] = Field(None, max_length=500)


class BootcampResponse(BaseModel):
    """Bootcamp response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: Optional[str] = None
    description: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    duration: int
    level: str
    category: List[str]
    cost_type: str
    price: Optional[float] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    online_available: bool
    address: Optional[str] = None
    location: Optional[Dict[str, Any]] = None
    electronic_medium: Optional[str] = None
    medium_link: Optional[str] = None
    photo: str
    average_rating: Optional[float] = None
    user_id: UUID
    owner: Optional[OwnerSummary] = None
    courses: List[CourseSummary] = []
    created_at: datetime
    updated_at: Optional[datetime] = None
