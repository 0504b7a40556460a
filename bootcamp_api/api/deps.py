"""
API Dependencies
Common dependencies for API endpoints (authentication, authorization, etc.)
"""

from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.config import settings
from bootcamp_api.core.exceptions import ForbiddenError, UnauthenticatedError
from bootcamp_api.core.security import Role, decode_token
from bootcamp_api.db.session import get_db
from bootcamp_api.models.user import User

# Bearer header is optional; the session cookie is the fallback
bearer_scheme = HTTPBearer(auto_error=False)

__all__ = ["get_db", "get_current_user", "require_role"]


def _extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.JWT_COOKIE_NAME)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get current authenticated user from the bearer token or session cookie
    """
    token = _extract_token(request, credentials)
    if not token:
        raise UnauthenticatedError("Not authorized, no token")

    payload = decode_token(token)
    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise UnauthenticatedError("Invalid token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise UnauthenticatedError("User no longer exists")

    return user


def require_role(*roles: Role) -> Callable:
    """
    Dependency factory restricting a route to the given roles.

    Usage: ``current_user: User = Depends(require_role(Role.ADMIN))``
    """
    allowed = {Role(role).value for role in roles}

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise ForbiddenError(
                f"User role {current_user.role} is not authorized to access this route"
            )
        return current_user

    return checker
