"""
Bootcamp/review lifecycle steps.

Every write path in the services calls these explicitly, in this order:

1. ``prepare_bootcamp`` before a bootcamp is persisted (price rule, delivery
   normalization, slug, end date)
2. ``recalculate_average_rating`` after a review is created, updated or
   deleted, inside the same transaction
3. ``delete_bootcamp_cascade`` instead of a bare bootcamp delete
"""

import re
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.core.exceptions import BadRequestError
from bootcamp_api.models.bootcamp import Bootcamp
from bootcamp_api.models.course import Course
from bootcamp_api.models.review import Review
from bootcamp_api.utils.constants import DEFAULT_ELECTRONIC_MEDIUM

logger = structlog.get_logger(__name__)

SLUG_STRIP_PATTERN = re.compile(r"[^A-Za-z0-9_-]+")


def slugify(name: str) -> str:
    """Lowercase, spaces to hyphens, drop everything outside [A-Za-z0-9_-]."""
    return SLUG_STRIP_PATTERN.sub("", name.lower().replace(" ", "-"))


def compute_end_date(start_date: datetime, duration_weeks: int) -> datetime:
    return start_date + timedelta(days=duration_weeks * 7)


def apply_price_rule(bootcamp: Bootcamp) -> None:
    """Paid bootcamps need a price; free ones never keep one."""
    if bootcamp.cost_type == "Paid":
        if bootcamp.price is None:
            raise BadRequestError("Please add a price for a paid bootcamp")
    else:
        bootcamp.price = None


def normalize_delivery(bootcamp: Bootcamp) -> None:
    """Keep exactly one of address / (electronic medium, link), by online flag."""
    if bootcamp.online_available:
        bootcamp.address = None
        bootcamp.location = None
        bootcamp.electronic_medium = bootcamp.electronic_medium or DEFAULT_ELECTRONIC_MEDIUM
        if not (bootcamp.medium_link or "").strip():
            raise BadRequestError("Please provide a valid URL if the bootcamp is online")
    else:
        if not bootcamp.address or not bootcamp.address.strip():
            raise BadRequestError("Address is required if the bootcamp is not online")
        bootcamp.address = bootcamp.address.strip()
        bootcamp.electronic_medium = None
        bootcamp.medium_link = None


def prepare_bootcamp(bootcamp: Bootcamp) -> Bootcamp:
    """Validate cross-field rules and refresh derived fields before persisting."""
    apply_price_rule(bootcamp)
    normalize_delivery(bootcamp)

    bootcamp.slug = slugify(bootcamp.name)

    if bootcamp.start_date is not None and bootcamp.duration:
        bootcamp.end_date = compute_end_date(bootcamp.start_date, bootcamp.duration)

    return bootcamp


async def recalculate_average_rating(db: AsyncSession, bootcamp_id: UUID) -> Optional[float]:
    """
    Store the mean rating of the bootcamp's current reviews (0 when none).

    Flushes pending review changes first so the aggregate sees them.
    """
    await db.flush()

    result = await db.execute(
        select(func.avg(Review.rating)).where(Review.bootcamp_id == bootcamp_id)
    )
    average = result.scalar()
    average_rating = float(average) if average is not None else 0.0

    bootcamp = await db.get(Bootcamp, bootcamp_id)
    if bootcamp is None:
        return None

    bootcamp.average_rating = average_rating
    await db.flush()

    logger.info(
        "average_rating_recalculated",
        bootcamp_id=str(bootcamp_id),
        average_rating=average_rating,
    )
    return average_rating


async def delete_bootcamp_cascade(db: AsyncSession, bootcamp: Bootcamp) -> int:
    """
    Delete a bootcamp's courses and reviews, then the bootcamp.

    Runs in the caller's transaction; the caller commits or rolls back the
    whole sequence.
    """
    course_result = await db.execute(delete(Course).where(Course.bootcamp_id == bootcamp.id))
    await db.execute(delete(Review).where(Review.bootcamp_id == bootcamp.id))
    await db.delete(bootcamp)
    await db.flush()

    logger.info(
        "bootcamp_cascade_deleted",
        bootcamp_id=str(bootcamp.id),
        courses_removed=course_result.rowcount,
    )
    return course_result.rowcount
