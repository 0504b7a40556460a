"""Security utilities: roles, password hashing, JWT sessions, reset tokens."""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import NamedTuple, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from bootcamp_api.config import settings
from bootcamp_api.core.exceptions import UnauthenticatedError


class Role(str, Enum):
    """User roles."""

    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Unrecognised or corrupted hash
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_token(token: str) -> dict:
    """Decode and verify a JWT access token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise UnauthenticatedError("Invalid token")

    if payload.get("type") != "access" or not payload.get("sub"):
        raise UnauthenticatedError("Invalid token")

    return payload


def cookie_options() -> dict:
    """Attributes for the session cookie that mirrors the bearer token."""
    return {
        "httponly": True,
        "secure": settings.IS_PRODUCTION,
        "samesite": "strict" if settings.IS_PRODUCTION else "lax",
        "max_age": settings.JWT_COOKIE_EXPIRE_DAYS * 24 * 60 * 60,
    }


class ResetToken(NamedTuple):
    raw: str  # sent to the user, never stored
    digest: str  # stored on the user row
    expires_at: datetime


def hash_reset_token(raw_token: str) -> str:
    """Deterministic sha256 digest used to look a reset token up."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def generate_reset_token() -> ResetToken:
    """Issue a random reset token, its digest and its expiry (naive UTC)."""
    raw = secrets.token_hex(20)
    expires_at = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(
        minutes=settings.RESET_TOKEN_EXPIRE_MINUTES
    )
    return ResetToken(raw=raw, digest=hash_reset_token(raw), expires_at=expires_at)
