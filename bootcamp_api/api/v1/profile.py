"""Profile endpoints for the logged in user."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.api.deps import get_current_user, get_db
from bootcamp_api.models.user import User
from bootcamp_api.schemas.common import ApiResponse
from bootcamp_api.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate
from bootcamp_api.services.profile_service import ProfileService

router = APIRouter()


@router.get("", response_model=ApiResponse[ProfileResponse])
async def get_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await ProfileService(db).get_profile(current_user)
    return ApiResponse[ProfileResponse](data=ProfileResponse.model_validate(profile))


@router.post(
    "",
    response_model=ApiResponse[ProfileResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_profile(
    data: ProfileCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await ProfileService(db).create_profile(current_user, data)
    return ApiResponse[ProfileResponse](data=ProfileResponse.model_validate(profile))


@router.put("", response_model=ApiResponse[ProfileResponse])
async def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await ProfileService(db).update_profile(current_user, data)
    return ApiResponse[ProfileResponse](data=ProfileResponse.model_validate(profile))
