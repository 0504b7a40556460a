"""Profile model."""

from sqlalchemy import Column, String

from bootcamp_api.db.base import Base


class Profile(Base):
    """Personal details, owned 1:1 by a user (``User.profile_id``)."""

    __tablename__ = "profiles"

    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    gender = Column(String(10), nullable=False)  # male, female
    phone = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<Profile {self.firstname} {self.lastname}>"
