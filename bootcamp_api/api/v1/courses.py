"""Course endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.api.deps import get_current_user, get_db
from bootcamp_api.models.user import User
from bootcamp_api.schemas.common import ApiResponse
from bootcamp_api.schemas.course import CourseResponse, CourseUpdate
from bootcamp_api.services.course_service import CourseService

router = APIRouter()


@router.get("", response_model=ApiResponse[List[CourseResponse]])
async def list_courses(db: AsyncSession = Depends(get_db)):
    courses = await CourseService(db).list_courses()
    return ApiResponse[List[CourseResponse]](
        count=len(courses),
        data=[CourseResponse.model_validate(c) for c in courses],
    )


@router.get("/user", response_model=ApiResponse[List[CourseResponse]])
async def list_my_courses(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the courses created by the logged in user."""
    courses = await CourseService(db).list_user_courses(current_user)
    return ApiResponse[List[CourseResponse]](
        count=len(courses),
        data=[CourseResponse.model_validate(c) for c in courses],
    )


@router.get("/{course_id}", response_model=ApiResponse[CourseResponse])
async def get_course(course_id: UUID, db: AsyncSession = Depends(get_db)):
    course = await CourseService(db).get_course(course_id)
    return ApiResponse[CourseResponse](data=CourseResponse.model_validate(course))


@router.put("/{course_id}", response_model=ApiResponse[CourseResponse])
async def update_course(
    course_id: UUID,
    data: CourseUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    course = await CourseService(db).update_course(current_user, course_id, data)
    return ApiResponse[CourseResponse](data=CourseResponse.model_validate(course))


@router.delete("/{course_id}", response_model=ApiResponse[dict])
async def delete_course(
    course_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await CourseService(db).delete_course(current_user, course_id)
    return ApiResponse[dict](data={})
