"""Review model."""

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from bootcamp_api.db.base import Base


class Review(Base):
    """A user's rating of a bootcamp. One review per (bootcamp, user)."""

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("bootcamp_id", "user_id", name="uq_reviews_bootcamp_user"),
    )

    comment = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5

    bootcamp_id = Column(Uuid(as_uuid=True), ForeignKey("bootcamps.id"), index=True, nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)

    # Relationships
    author = relationship("User", lazy="selectin", viewonly=True)
    bootcamp = relationship("Bootcamp", lazy="selectin", viewonly=True)

    def __repr__(self):
        return f"<Review {self.rating}/5 by {self.user_id}>"
