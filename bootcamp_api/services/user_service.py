"""Account administration service."""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.core.exceptions import ConflictError, NotFoundError
from bootcamp_api.core.security import Role, get_password_hash
from bootcamp_api.models.bootcamp import Bootcamp
from bootcamp_api.models.course import Course
from bootcamp_api.models.profile import Profile
from bootcamp_api.models.review import Review
from bootcamp_api.models.user import User
from bootcamp_api.schemas.user import UserCreate, UserUpdate
from bootcamp_api.services.lifecycle import recalculate_average_rating

logger = structlog.get_logger(__name__)


class UserService:
    """CRUD over user accounts. Role checks happen in the router (admin only)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: UUID) -> User:
        result = await self.db.execute(
            select(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def list_users(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def ensure_unique(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        """Raise ConflictError if the username or email is taken by another user."""
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email.lower())
        if not conditions:
            return

        query = select(User).where(or_(*conditions))
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)

        for existing in result.scalars().all():
            if username and existing.username == username:
                raise ConflictError(
                    f"{username} is already taken. Please choose a different username."
                )
            raise ConflictError("User already exists")

    async def create_account(
        self,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> User:
        """Create a user with a hashed password; shared by register and admin create."""
        await self.ensure_unique(username=username, email=email)

        user = User(
            username=username,
            email=email.lower(),
            password_hash=get_password_hash(password),
            role=Role(role).value,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")

        logger.info("user_created", user_id=str(user.id), role=user.role)
        return await self.get_user(user.id)

    async def create_user(self, data: UserCreate) -> User:
        return await self.create_account(data.username, str(data.email), data.password, data.role)

    async def update_user(self, user_id: UUID, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        await self.ensure_unique(
            username=changes.get("username"),
            email=str(changes["email"]) if "email" in changes else None,
            exclude_id=user.id,
        )

        if "username" in changes:
            user.username = changes["username"]
        if "email" in changes:
            user.email = str(changes["email"]).lower()
        if "role" in changes:
            user.role = Role(changes["role"]).value
        if "password" in changes:
            user.password_hash = get_password_hash(changes["password"])

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")

        logger.info("user_updated", user_id=str(user.id), fields=sorted(changes))
        return await self.get_user(user.id)

    async def delete_user(self, user_id: UUID) -> None:
        """
        Delete a user with their reviews and profile.

        Refused while the user still owns bootcamps or courses.
        """
        user = await self.get_user(user_id)

        owned_bootcamps = await self.db.scalar(
            select(func.count()).select_from(Bootcamp).where(Bootcamp.user_id == user.id)
        )
        owned_courses = await self.db.scalar(
            select(func.count()).select_from(Course).where(Course.user_id == user.id)
        )
        if owned_bootcamps or owned_courses:
            raise ConflictError(
                "User still owns bootcamps or courses. Delete or reassign them first."
            )

        result = await self.db.execute(
            select(Review.bootcamp_id).where(Review.user_id == user.id)
        )
        reviewed_bootcamp_ids = set(result.scalars().all())
        profile_id = user.profile_id

        try:
            await self.db.execute(delete(Review).where(Review.user_id == user.id))
            for bootcamp_id in reviewed_bootcamp_ids:
                await recalculate_average_rating(self.db, bootcamp_id)

            await self.db.delete(user)
            await self.db.flush()
            if profile_id is not None:
                await self.db.execute(delete(Profile).where(Profile.id == profile_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "user_deleted",
            user_id=str(user_id),
            reviews_removed=len(reviewed_bootcamp_ids),
        )
