"""API v1 routes."""

from fastapi import APIRouter

from bootcamp_api.api.v1 import auth, bootcamps, courses, profile, reviews, users

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(bootcamps.router, prefix="/bootcamps", tags=["Bootcamps"])
api_router.include_router(courses.router, prefix="/courses", tags=["Courses"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
