"""Profile service (one profile per user)."""

import structlog
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.core.exceptions import BadRequestError, NotFoundError
from bootcamp_api.models.profile import Profile
from bootcamp_api.models.user import User
from bootcamp_api.schemas.profile import ProfileCreate, ProfileUpdate

logger = structlog.get_logger(__name__)


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, user: User) -> Profile:
        if user.profile_id is None:
            raise NotFoundError("Profile not found")
        profile = await self.db.get(Profile, user.profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def get_profile(self, user: User) -> Profile:
        return await self._load(user)

    async def create_profile(self, user: User, data: ProfileCreate) -> Profile:
        if user.profile_id is not None:
            raise BadRequestError("Profile already exists for this user")

        profile = Profile(**data.model_dump())
        self.db.add(profile)
        await self.db.flush()

        # Only link when no concurrent request has linked a profile first
        result = await self.db.execute(
            update(User)
            .where(User.id == user.id, User.profile_id.is_(None))
            .values(profile_id=profile.id)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            raise BadRequestError("Profile already exists for this user")

        await self.db.commit()
        await self.db.refresh(user)

        logger.info("profile_created", user_id=str(user.id), profile_id=str(profile.id))
        return profile

    async def update_profile(self, user: User, data: ProfileUpdate) -> Profile:
        profile = await self._load(user)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(profile, field, value)
        await self.db.commit()
        await self.db.refresh(profile)

        logger.info("profile_updated", user_id=str(user.id), fields=sorted(changes))
        return profile
