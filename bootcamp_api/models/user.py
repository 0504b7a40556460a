"""User model."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from bootcamp_api.db.base import Base


class User(Base):
    """User account used for authentication and ownership."""

    __tablename__ = "users"

    username = Column(String(20), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")

    # Password reset (sha256 digest of the emailed token)
    reset_password_token = Column(String(64), index=True, nullable=True)
    reset_password_expires = Column(DateTime, nullable=True)

    profile_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id"), unique=True, nullable=True)

    # Relationships
    profile = relationship("Profile", lazy="selectin")

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"
