"""Review service. Every write recomputes the bootcamp's average rating."""

from typing import List
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.core.exceptions import ConflictError, NotFoundError
from bootcamp_api.core.permissions import Action, Resource, authorize
from bootcamp_api.models.bootcamp import Bootcamp
from bootcamp_api.models.review import Review
from bootcamp_api.models.user import User
from bootcamp_api.schemas.review import ReviewCreate, ReviewUpdate
from bootcamp_api.services.lifecycle import recalculate_average_rating

logger = structlog.get_logger(__name__)

DUPLICATE_REVIEW_MESSAGE = (
    "You can only leave one review per bootcamp. "
    "You've already submitted yours. Thanks for your feedback!"
)


class ReviewService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_bootcamp(self, bootcamp_id: UUID) -> Bootcamp:
        bootcamp = await self.db.get(Bootcamp, bootcamp_id)
        if bootcamp is None:
            raise NotFoundError("Bootcamp not found")
        return bootcamp

    async def get_review(self, review_id: UUID) -> Review:
        result = await self.db.execute(
            select(Review).where(Review.id == review_id).execution_options(populate_existing=True)
        )
        review = result.scalar_one_or_none()
        if review is None:
            raise NotFoundError("Review not found")
        return review

    async def list_reviews(self, bootcamp_id: UUID) -> List[Review]:
        await self._get_bootcamp(bootcamp_id)
        result = await self.db.execute(
            select(Review)
            .where(Review.bootcamp_id == bootcamp_id)
            .order_by(Review.created_at.desc())
        )
        return list(result.scalars().all())

    async def create_review(self, actor: User, bootcamp_id: UUID, data: ReviewCreate) -> Review:
        bootcamp = await self._get_bootcamp(bootcamp_id)
        authorize(
            actor,
            Resource.REVIEW,
            Action.CREATE,
            owner_id=bootcamp.user_id,
            message="You cannot review your own bootcamp",
        )

        existing = await self.db.execute(
            select(Review.id).where(
                Review.bootcamp_id == bootcamp.id,
                Review.user_id == actor.id,
            )
        )
        if existing.first() is not None:
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE)

        review = Review(**data.model_dump(), bootcamp_id=bootcamp.id, user_id=actor.id)
        self.db.add(review)
        try:
            await recalculate_average_rating(self.db, bootcamp.id)
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent review by the same user
            await self.db.rollback()
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE)

        logger.info("review_created", review_id=str(review.id), bootcamp_id=str(bootcamp.id))
        return await self.get_review(review.id)

    async def update_review(self, actor: User, review_id: UUID, data: ReviewUpdate) -> Review:
        review = await self.get_review(review_id)
        authorize(
            actor,
            Resource.REVIEW,
            Action.UPDATE,
            owner_id=review.user_id,
            message="User not authorized to update this review",
        )

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(review, field, value)

        await recalculate_average_rating(self.db, review.bootcamp_id)
        await self.db.commit()

        logger.info("review_updated", review_id=str(review.id), fields=sorted(changes))
        return await self.get_review(review.id)

    async def delete_review(self, actor: User, review_id: UUID) -> None:
        review = await self.get_review(review_id)
        authorize(
            actor,
            Resource.REVIEW,
            Action.DELETE,
            owner_id=review.user_id,
            message="User not authorized to delete this review",
        )

        bootcamp_id = review.bootcamp_id
        await self.db.delete(review)
        await recalculate_average_rating(self.db, bootcamp_id)
        await self.db.commit()

        logger.info("review_deleted", review_id=str(review_id), bootcamp_id=str(bootcamp_id))
