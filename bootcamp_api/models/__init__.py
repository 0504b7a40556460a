"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization

# Base models (no foreign keys)
from bootcamp_api.models.profile import Profile

# Models with foreign keys to base models
from bootcamp_api.models.user import User
from bootcamp_api.models.bootcamp import Bootcamp

# Models with foreign keys to other models
from bootcamp_api.models.course import Course
from bootcamp_api.models.review import Review

# Export all models
__all__ = [
    "Profile",
    "User",
    "Bootcamp",
    "Course",
    "Review",
]
