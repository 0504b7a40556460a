"""Course model."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from bootcamp_api.db.base import Base


class Course(Base):
    """Course offered by a bootcamp."""

    __tablename__ = "courses"

    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    duration = Column(Integer, nullable=False)  # hours
    instructor = Column(String(100), nullable=False)
    prerequisites = Column(JSON, nullable=False, default=list)  # ordered titles

    bootcamp_id = Column(Uuid(as_uuid=True), ForeignKey("bootcamps.id"), index=True, nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)

    # Relationships
    bootcamp = relationship("Bootcamp", lazy="selectin", viewonly=True)

    def __repr__(self):
        return f"<Course {self.title}>"
