"""Course service."""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.core.exceptions import NotFoundError
from bootcamp_api.core.permissions import Action, Resource, authorize
from bootcamp_api.models.bootcamp import Bootcamp
from bootcamp_api.models.course import Course
from bootcamp_api.models.user import User
from bootcamp_api.schemas.course import CourseCreate, CourseUpdate

logger = structlog.get_logger(__name__)


class CourseService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_bootcamp(self, bootcamp_id: UUID) -> Bootcamp:
        bootcamp = await self.db.get(Bootcamp, bootcamp_id)
        if bootcamp is None:
            raise NotFoundError("Bootcamp not found")
        return bootcamp

    async def get_course(self, course_id: UUID) -> Course:
        result = await self.db.execute(
            select(Course).where(Course.id == course_id).execution_options(populate_existing=True)
        )
        course = result.scalar_one_or_none()
        if course is None:
            raise NotFoundError("Course not found")
        return course

    async def list_courses(self, bootcamp_id: Optional[UUID] = None) -> List[Course]:
        """All courses, or the courses of one bootcamp (404 if it does not exist)."""
        query = select(Course).order_by(Course.created_at)
        if bootcamp_id is not None:
            await self._get_bootcamp(bootcamp_id)
            query = query.where(Course.bootcamp_id == bootcamp_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_user_courses(self, user: User) -> List[Course]:
        result = await self.db.execute(
            select(Course).where(Course.user_id == user.id).order_by(Course.created_at)
        )
        return list(result.scalars().all())

    async def create_course(self, actor: User, bootcamp_id: UUID, data: CourseCreate) -> Course:
        bootcamp = await self._get_bootcamp(bootcamp_id)
        authorize(
            actor,
            Resource.COURSE,
            Action.CREATE,
            owner_id=bootcamp.user_id,
            message=f"User {actor.username} is not authorized to add a course to this bootcamp",
        )

        course = Course(**data.model_dump(), bootcamp_id=bootcamp.id, user_id=actor.id)
        self.db.add(course)
        await self.db.commit()

        logger.info("course_created", course_id=str(course.id), bootcamp_id=str(bootcamp.id))
        return await self.get_course(course.id)

    async def update_course(self, actor: User, course_id: UUID, data: CourseUpdate) -> Course:
        course = await self.get_course(course_id)
        authorize(
            actor,
            Resource.COURSE,
            Action.UPDATE,
            owner_id=course.user_id,
            message=f"User {actor.username} is not authorized to update this course",
        )

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(course, field, value)
        await self.db.commit()

        logger.info("course_updated", course_id=str(course.id), fields=sorted(changes))
        return await self.get_course(course.id)

    async def delete_course(self, actor: User, course_id: UUID) -> None:
        course = await self.get_course(course_id)
        authorize(
            actor,
            Resource.COURSE,
            Action.DELETE,
            owner_id=course.user_id,
            message=f"User {actor.username} is not authorized to delete this course",
        )

        await self.db.delete(course)
        await self.db.commit()

        logger.info("course_deleted", course_id=str(course_id))
