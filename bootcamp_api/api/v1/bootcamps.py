"""
Bootcamp endpoints, including the nested course and review routes
(/bootcamps/{bootcamp_id}/courses, /bootcamps/{bootcamp_id}/reviews).
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.api.deps import get_current_user, get_db
from bootcamp_api.config import settings
from bootcamp_api.core.exceptions import BadRequestError
from bootcamp_api.models.user import User
from bootcamp_api.schemas.bootcamp import BootcampCreate, BootcampResponse, BootcampUpdate
from bootcamp_api.schemas.common import ApiResponse
from bootcamp_api.schemas.course import CourseCreate, CourseResponse
from bootcamp_api.schemas.review import ReviewCreate, ReviewResponse
from bootcamp_api.services.bootcamp_service import BootcampService
from bootcamp_api.services.course_service import CourseService
from bootcamp_api.services.file_storage import FileStorage, get_file_storage
from bootcamp_api.services.geocoder import Geocoder, get_geocoder
from bootcamp_api.services.review_service import ReviewService

router = APIRouter()


def get_bootcamp_service(
    db: AsyncSession = Depends(get_db),
    geocoder: Optional[Geocoder] = Depends(get_geocoder),
    file_storage: FileStorage = Depends(get_file_storage),
) -> BootcampService:
    return BootcampService(db, geocoder=geocoder, file_storage=file_storage)


@router.get("", response_model=ApiResponse[List[BootcampResponse]])
async def list_bootcamps(service: BootcampService = Depends(get_bootcamp_service)):
    """List all bootcamps (public)."""
    bootcamps = await service.list_bootcamps()
    return ApiResponse[List[BootcampResponse]](
        count=len(bootcamps),
        data=[BootcampResponse.model_validate(b) for b in bootcamps],
    )


# Declared before /{bootcamp_id} so "user" is not parsed as an id
@router.get("/user", response_model=ApiResponse[List[BootcampResponse]])
async def list_my_bootcamps(
    current_user: User = Depends(get_current_user),
    service: BootcampService = Depends(get_bootcamp_service),
):
    """List the bootcamps owned by the logged in user."""
    bootcamps = await service.list_user_bootcamps(current_user)
    return ApiResponse[List[BootcampResponse]](
        count=len(bootcamps),
        data=[BootcampResponse.model_validate(b) for b in bootcamps],
    )


@router.get("/{bootcamp_id}", response_model=ApiResponse[BootcampResponse])
async def get_bootcamp(
    bootcamp_id: UUID,
    service: BootcampService = Depends(get_bootcamp_service),
):
    bootcamp = await service.get_bootcamp(bootcamp_id)
    return ApiResponse[BootcampResponse](data=BootcampResponse.model_validate(bootcamp))


@router.post(
    "",
    response_model=ApiResponse[BootcampResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_bootcamp(
    data: BootcampCreate,
    current_user: User = Depends(get_current_user),
    service: BootcampService = Depends(get_bootcamp_service),
):
    """Create a bootcamp (admin or moderator)."""
    bootcamp = await service.create_bootcamp(current_user, data)
    return ApiResponse[BootcampResponse](data=BootcampResponse.model_validate(bootcamp))


@router.put("/{bootcamp_id}", response_model=ApiResponse[BootcampResponse])
async def update_bootcamp(
    bootcamp_id: UUID,
    data: BootcampUpdate,
    current_user: User = Depends(get_current_user),
    service: BootcampService = Depends(get_bootcamp_service),
):
    bootcamp = await service.update_bootcamp(current_user, bootcamp_id, data)
    return ApiResponse[BootcampResponse](data=BootcampResponse.model_validate(bootcamp))


@router.delete("/{bootcamp_id}", response_model=ApiResponse[dict])
async def delete_bootcamp(
    bootcamp_id: UUID,
    current_user: User = Depends(get_current_user),
    service: BootcampService = Depends(get_bootcamp_service),
):
    """Delete a bootcamp together with its courses and reviews."""
    await service.delete_bootcamp(current_user, bootcamp_id)
    return ApiResponse[dict](data={})


@router.put("/{bootcamp_id}/photo", response_model=ApiResponse[str])
async def upload_bootcamp_photo(
    bootcamp_id: UUID,
    photo: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    service: BootcampService = Depends(get_bootcamp_service),
):
    """Upload a bootcamp photo (multipart field ``photo``)."""
    if photo is None:
        raise BadRequestError("Please upload a file")

    # At most one byte past the limit
    content = await photo.read(settings.MAX_FILE_UPLOAD + 1)
    stored_name = await service.upload_photo(
        current_user,
        bootcamp_id,
        content=content,
        filename=photo.filename,
        content_type=photo.content_type,
    )
    return ApiResponse[str](data=stored_name)


@router.get("/{bootcamp_id}/courses", response_model=ApiResponse[List[CourseResponse]])
async def list_bootcamp_courses(bootcamp_id: UUID, db: AsyncSession = Depends(get_db)):
    courses = await CourseService(db).list_courses(bootcamp_id)
    return ApiResponse[List[CourseResponse]](
        count=len(courses),
        data=[CourseResponse.model_validate(c) for c in courses],
    )


@router.post(
    "/{bootcamp_id}/courses",
    response_model=ApiResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_course(
    bootcamp_id: UUID,
    data: CourseCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a course to a bootcamp (bootcamp owner or admin)."""
    course = await CourseService(db).create_course(current_user, bootcamp_id, data)
    return ApiResponse[CourseResponse](data=CourseResponse.model_validate(course))


@router.get("/{bootcamp_id}/reviews", response_model=ApiResponse[List[ReviewResponse]])
async def list_bootcamp_reviews(bootcamp_id: UUID, db: AsyncSession = Depends(get_db)):
    reviews = await ReviewService(db).list_reviews(bootcamp_id)
    return ApiResponse[List[ReviewResponse]](
        count=len(reviews),
        data=[ReviewResponse.model_validate(r) for r in reviews],
    )


@router.post(
    "/{bootcamp_id}/reviews",
    response_model=ApiResponse[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    bootcamp_id: UUID,
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Review a bootcamp. One review per user, never on your own bootcamp."""
    review = await ReviewService(db).create_review(current_user, bootcamp_id, data)
    return ApiResponse[ReviewResponse](data=ReviewResponse.model_validate(review))
