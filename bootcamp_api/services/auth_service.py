"""Authentication service: registration, login and password lifecycle."""

from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_api.core.exceptions import (
    BadRequestError,
    NotFoundError,
    UnauthenticatedError,
    UpstreamError,
)
from bootcamp_api.core.security import (
    Role,
    create_access_token,
    generate_reset_token,
    get_password_hash,
    hash_reset_token,
    verify_password,
)
from bootcamp_api.models.user import User
from bootcamp_api.schemas.auth import RegisterRequest
from bootcamp_api.services.email_service import EmailDeliveryError, EmailSender
from bootcamp_api.services.user_service import UserService

logger = structlog.get_logger(__name__)


def issue_token(user: User) -> str:
    """Sign a session token for the user."""
    return create_access_token(data={"sub": str(user.id), "role": user.role})


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserService(db)

    async def get_user(self, user_id: UUID) -> User:
        return await self.users.get_user(user_id)

    async def register(self, request: RegisterRequest) -> User:
        user = await self.users.create_account(
            username=request.username,
            email=str(request.email),
            password=request.password,
            role=Role.USER,
        )
        logger.info("user_registered", user_id=str(user.id))
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise UnauthenticatedError("Invalid credentials")

        logger.info("user_logged_in", user_id=str(user.id))
        return user

    async def forgot_password(
        self,
        email: str,
        email_sender: EmailSender,
        build_reset_url: Callable[[str], str],
    ) -> None:
        """
        Issue a reset token and email the reset link.

        Only the token digest is stored. If the email cannot be sent the
        token is cleared again so no usable token is left behind.
        """
        user = await self.users.get_by_email(email)
        if user is None:
            raise NotFoundError("There is no user with that email")

        reset = generate_reset_token()
        user.reset_password_token = reset.digest
        user.reset_password_expires = reset.expires_at
        await self.db.commit()

        reset_url = build_reset_url(reset.raw)
        body = (
            "You are receiving this email because you (or someone else) has requested "
            f"the reset of a password. Please make a PUT request to: \n\n {reset_url}"
        )

        try:
            await email_sender.send(recipient=user.email, subject="Password reset token", body=body)
        except EmailDeliveryError:
            user.reset_password_token = None
            user.reset_password_expires = None
            await self.db.commit()
            logger.error("password_reset_email_failed", user_id=str(user.id))
            raise UpstreamError("Email could not be sent")

        logger.info("password_reset_requested", user_id=str(user.id))

    async def reset_password(self, raw_token: str, new_password: str) -> User:
        """Consume a reset token. Each token works once, before it expires."""
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        result = await self.db.execute(
            select(User).where(
                User.reset_password_token == hash_reset_token(raw_token),
                User.reset_password_expires > now,
            )
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise BadRequestError("Invalid or expired token")

        user.password_hash = get_password_hash(new_password)
        user.reset_password_token = None
        user.reset_password_expires = None
        await self.db.commit()

        logger.info("password_reset_completed", user_id=str(user.id))
        return await self.users.get_user(user.id)

    async def update_password(self, user: User, current_password: str, new_password: str) -> User:
        if not verify_password(current_password, user.password_hash):
            raise UnauthenticatedError("Password is incorrect")

        user.password_hash = get_password_hash(new_password)
        await self.db.commit()

        logger.info("password_updated", user_id=str(user.id))
        return await self.users.get_user(user.id)

    async def change_role(self, user_id: UUID, role: Role) -> User:
        user = await self.users.get_user(user_id)
        user.role = Role(role).value
        await self.db.commit()

        logger.info("user_role_changed", user_id=str(user.id), role=user.role)
        return await self.users.get_user(user.id)
