"""Review endpoints. Listing and creation live under /bootcamps/{bootcamp_id}/reviews."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.api.deps import get_current_user, get_db
from bootcamp_api.models.user import User
from bootcamp_api.schemas.common import ApiResponse
from bootcamp_api.schemas.review import ReviewResponse, ReviewUpdate
from bootcamp_api.services.review_service import ReviewService

router = APIRouter()


@router.get("/{review_id}", response_model=ApiResponse[ReviewResponse])
async def get_review(review_id: UUID, db: AsyncSession = Depends(get_db)):
    review = await ReviewService(db).get_review(review_id)
    return ApiResponse[ReviewResponse](data=ReviewResponse.model_validate(review))


@router.put("/{review_id}", response_model=ApiResponse[ReviewResponse])
async def update_review(
    review_id: UUID,
    data: ReviewUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    review = await ReviewService(db).update_review(current_user, review_id, data)
    return ApiResponse[ReviewResponse](data=ReviewResponse.model_validate(review))


@router.delete("/{review_id}", response_model=ApiResponse[dict])
async def delete_review(
    review_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ReviewService(db).delete_review(current_user, review_id)
    return ApiResponse[dict](data={})
