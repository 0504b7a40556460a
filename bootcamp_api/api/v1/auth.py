"""Authentication endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.api.deps import get_current_user, get_db, require_role
from bootcamp_api.config import settings
from bootcamp_api.core.security import Role, cookie_options
from bootcamp_api.models.user import User
from bootcamp_api.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    RoleUpdateRequest,
    UpdatePasswordRequest,
)
from bootcamp_api.schemas.common import ApiResponse
from bootcamp_api.schemas.user import UserResponse
from bootcamp_api.services.auth_service import AuthService, issue_token
from bootcamp_api.services.email_service import EmailSender, get_email_sender

router = APIRouter()


def token_response(user: User, response: Response) -> AuthResponse:
    """Sign a token, mirror it into the session cookie and wrap the user."""
    token = issue_token(user)
    response.set_cookie(settings.JWT_COOKIE_NAME, token, **cookie_options())
    return AuthResponse(token=token, data=UserResponse.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Register a new user."""
    user = await AuthService(db).register(request)
    return token_response(user, response)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Login with email and password."""
    user = await AuthService(db).login(str(request.email), request.password)
    return token_response(user, response)


@router.post("/logout", response_model=ApiResponse[dict])
async def logout(response: Response, current_user: User = Depends(get_current_user)):
    """Clear the session cookie."""
    response.delete_cookie(settings.JWT_COOKIE_NAME)
    return ApiResponse[dict](data={})


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the logged in user."""
    return ApiResponse[UserResponse](data=UserResponse.model_validate(current_user))


@router.put("/updatepassword", response_model=AuthResponse)
async def update_password(
    request: UpdatePasswordRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await AuthService(db).update_password(
        current_user, request.current_password, request.new_password
    )
    return token_response(user, response)


@router.post("/forgotpassword", response_model=ApiResponse[str])
async def forgot_password(
    body: ForgotPasswordRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """Email a single-use password reset link."""
    await AuthService(db).forgot_password(
        str(body.email),
        email_sender,
        lambda token: str(request.url_for("reset_password", reset_token=token)),
    )
    return ApiResponse[str](data="Email sent")


@router.put("/resetpassword/{reset_token}", response_model=AuthResponse)
async def reset_password(
    reset_token: str,
    body: ResetPasswordRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    user = await AuthService(db).reset_password(reset_token, body.password)
    return token_response(user, response)


@router.put("/{user_id}/role", response_model=ApiResponse[UserResponse])
async def change_role(
    user_id: UUID,
    body: RoleUpdateRequest,
    current_user: User = Depends(require_role(Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Change a user's role (admin only)."""
    user = await AuthService(db).change_role(user_id, body.role)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))
