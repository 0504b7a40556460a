"""Bootcamp model."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from bootcamp_api.db.base import Base
from bootcamp_api.utils.constants import DEFAULT_PHOTO


class Bootcamp(Base):
    """
    Bootcamp listing.

    ``slug``, ``end_date`` and ``average_rating`` are derived fields kept in
    sync by ``bootcamp_api.services.lifecycle``. Exactly one of ``address`` or
    (``electronic_medium``, ``medium_link``) is populated, chosen by
    ``online_available``.
    """

    __tablename__ = "bootcamps"

    name = Column(String(50), unique=True, index=True, nullable=False)
    slug = Column(String(100), index=True)
    description = Column(String(500), nullable=False)

    # Contact
    phone = Column(String(20))
    email = Column(String(255))
    website = Column(String(255))

    duration = Column(Integer, nullable=False)  # weeks
    level = Column(String(20), nullable=False, default="Beginner")
    category = Column(JSON, nullable=False, default=list)  # ["Web Development", ...]

    cost_type = Column(String(10), nullable=False)  # Free, Paid
    price = Column(Float, nullable=True)

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime)

    # Delivery
    online_available = Column(Boolean, nullable=False, default=False)
    address = Column(String(255))
    location = Column(JSON, nullable=True)  # {"lat": .., "lng": .., "formatted_address": ..}
    electronic_medium = Column(String(20))
    medium_link = Column(String(500))

    photo = Column(String(255), nullable=False, default=DEFAULT_PHOTO)
    average_rating = Column(Float, nullable=True)

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)

    # Relationships
    owner = relationship("User", lazy="selectin", viewonly=True)
    # Read-only: courses are removed explicitly by the bootcamp service
    courses = relationship(
        "Course",
        viewonly=True,
        lazy="selectin",
        order_by="Course.created_at",
    )

    def __repr__(self):
        return f"<Bootcamp {self.name}>"
