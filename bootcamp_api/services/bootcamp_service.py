"""Bootcamp service."""

from pathlib import Path
from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.config import settings
from bootcamp_api.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
)
from bootcamp_api.core.permissions import Action, Resource, authorize
from bootcamp_api.core.security import Role
from bootcamp_api.models.bootcamp import Bootcamp
from bootcamp_api.models.user import User
from bootcamp_api.schemas.bootcamp import BootcampCreate, BootcampUpdate
from bootcamp_api.services.file_storage import FileStorage, FileStorageError
from bootcamp_api.services.geocoder import Geocoder, GeocodingError
from bootcamp_api.services.lifecycle import delete_bootcamp_cascade, prepare_bootcamp

logger = structlog.get_logger(__name__)

# Fields an update may explicitly set to null
NULLABLE_FIELDS = {
    "phone",
    "email",
    "website",
    "price",
    "address",
    "electronic_medium",
    "medium_link",
}


class BootcampService:
    def __init__(
        self,
        db: AsyncSession,
        geocoder: Optional[Geocoder] = None,
        file_storage: Optional[FileStorage] = None,
    ):
        self.db = db
        self.geocoder = geocoder
        self.file_storage = file_storage

    async def get_bootcamp(self, bootcamp_id: UUID) -> Bootcamp:
        result = await self.db.execute(
            select(Bootcamp)
            .where(Bootcamp.id == bootcamp_id)
            .execution_options(populate_existing=True)
        )
        bootcamp = result.scalar_one_or_none()
        if bootcamp is None:
            raise NotFoundError("Bootcamp not found")
        return bootcamp

    async def list_bootcamps(self) -> List[Bootcamp]:
        result = await self.db.execute(select(Bootcamp).order_by(Bootcamp.created_at.desc()))
        return list(result.scalars().all())

    async def list_user_bootcamps(self, user: User) -> List[Bootcamp]:
        result = await self.db.execute(
            select(Bootcamp)
            .where(Bootcamp.user_id == user.id)
            .order_by(Bootcamp.created_at.desc())
        )
        return list(result.scalars().all())

    async def _ensure_unique_name(self, name: str, exclude_id: Optional[UUID] = None) -> None:
        query = select(Bootcamp.id).where(Bootcamp.name == name)
        if exclude_id is not None:
            query = query.where(Bootcamp.id != exclude_id)
        if (await self.db.execute(query)).first() is not None:
            raise ConflictError(f"A bootcamp named {name} already exists")

    async def _check_quota(self, actor: User) -> None:
        """Moderators may own at most MODERATOR_BOOTCAMP_QUOTA bootcamps."""
        if actor.role != Role.MODERATOR.value:
            return

        owned = await self.db.scalar(
            select(func.count()).select_from(Bootcamp).where(Bootcamp.user_id == actor.id)
        )
        if owned >= settings.MODERATOR_BOOTCAMP_QUOTA:
            logger.info("bootcamp_quota_exceeded", user_id=str(actor.id), owned=owned)
            raise ForbiddenError(
                "You have exceeded your storage plan. Contact the admin to review options."
            )

    async def _geocode(self, bootcamp: Bootcamp) -> None:
        if self.geocoder is None or bootcamp.online_available:
            return
        try:
            bootcamp.location = await self.geocoder.geocode(bootcamp.address)
        except GeocodingError:
            raise UpstreamError("Could not geocode the bootcamp address")

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Duplicate field value entered")

    async def create_bootcamp(self, actor: User, data: BootcampCreate) -> Bootcamp:
        authorize(
            actor,
            Resource.BOOTCAMP,
            Action.CREATE,
            message=f"User role {actor.role} is not authorized to create a bootcamp",
        )
        await self._check_quota(actor)
        await self._ensure_unique_name(data.name)

        bootcamp = Bootcamp(**data.model_dump(), user_id=actor.id)
        prepare_bootcamp(bootcamp)
        await self._geocode(bootcamp)

        self.db.add(bootcamp)
        await self._commit()

        logger.info("bootcamp_created", bootcamp_id=str(bootcamp.id), user_id=str(actor.id))
        return await self.get_bootcamp(bootcamp.id)

    async def update_bootcamp(
        self, actor: User, bootcamp_id: UUID, data: BootcampUpdate
    ) -> Bootcamp:
        bootcamp = await self.get_bootcamp(bootcamp_id)
        authorize(
            actor,
            Resource.BOOTCAMP,
            Action.UPDATE,
            owner_id=bootcamp.user_id,
            message="User not authorized to update this bootcamp",
        )

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if "name" in changes and changes["name"] != bootcamp.name:
            await self._ensure_unique_name(changes["name"], exclude_id=bootcamp.id)

        previous_address = bootcamp.address
        for field, value in changes.items():
            setattr(bootcamp, field, value)

        prepare_bootcamp(bootcamp)
        if not bootcamp.online_available and (
            bootcamp.address != previous_address or bootcamp.location is None
        ):
            await self._geocode(bootcamp)

        await self._commit()

        logger.info("bootcamp_updated", bootcamp_id=str(bootcamp.id), fields=sorted(changes))
        return await self.get_bootcamp(bootcamp.id)

    async def delete_bootcamp(self, actor: User, bootcamp_id: UUID) -> None:
        bootcamp = await self.get_bootcamp(bootcamp_id)
        authorize(
            actor,
            Resource.BOOTCAMP,
            Action.DELETE,
            owner_id=bootcamp.user_id,
            message="User not authorized to delete this bootcamp",
        )

        try:
            await delete_bootcamp_cascade(self.db, bootcamp)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def upload_photo(
        self,
        actor: User,
        bootcamp_id: UUID,
        content: bytes,
        filename: str,
        content_type: Optional[str],
    ) -> str:
        """
        Store an image for the bootcamp and point ``photo`` at it.

        The row is only updated after the file is in place.
        """
        bootcamp = await self.get_bootcamp(bootcamp_id)
        authorize(
            actor,
            Resource.BOOTCAMP,
            Action.UPDATE,
            owner_id=bootcamp.user_id,
            message="User not authorized to update this bootcamp",
        )

        if not content_type or not content_type.startswith("image"):
            raise BadRequestError("Please upload an image file")
        if len(content) > settings.MAX_FILE_UPLOAD:
            raise BadRequestError(
                f"Please upload an image less than {settings.MAX_FILE_UPLOAD} bytes"
            )

        stored_name = f"photo_{bootcamp.id}{Path(filename or '').suffix}"
        try:
            await self.file_storage.save(content, stored_name)
        except FileStorageError:
            raise UpstreamError("Problem uploading image")

        bootcamp.photo = stored_name
        await self.db.commit()

        logger.info("bootcamp_photo_uploaded", bootcamp_id=str(bootcamp.id), photo=stored_name)
        return stored_name
