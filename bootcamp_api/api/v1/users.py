"""
User administration endpoints.
All routes require the admin role.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.api.deps import get_db, require_role
from bootcamp_api.core.security import Role
from bootcamp_api.schemas.common import ApiResponse
from bootcamp_api.schemas.user import UserCreate, UserResponse, UserUpdate
from bootcamp_api.services.user_service import UserService

router = APIRouter(dependencies=[Depends(require_role(Role.ADMIN))])


@router.get("", response_model=ApiResponse[List[UserResponse]])
async def list_users(db: AsyncSession = Depends(get_db)):
    users = await UserService(db).list_users()
    return ApiResponse[List[UserResponse]](
        count=len(users),
        data=[UserResponse.model_validate(u) for u in users],
    )


@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await UserService(db).create_user(data)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    user = await UserService(db).get_user(user_id)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(user_id: UUID, data: UserUpdate, db: AsyncSession = Depends(get_db)):
    user = await UserService(db).update_user(user_id, data)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse[dict])
async def delete_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a user, their reviews and their profile."""
    await UserService(db).delete_user(user_id)
    return ApiResponse[dict](data={})
