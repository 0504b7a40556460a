"""Validators."""

import re
from typing import List

URL_PATTERN = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9]{3,20}$")


def validate_username(username: str) -> List[str]:
    """Validate username: 3-20 letters or digits."""
    errors = []

    if not 3 <= len(username) <= 20:
        errors.append("Username must be between 3 and 20 characters")
    elif not USERNAME_PATTERN.match(username):
        errors.append("Username must contain only letters and numbers")

    return errors


def validate_password_strength(password: str) -> tuple[bool, List[str]]:
    """Validate password strength."""
    errors = []

    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")

    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")

    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")

    if not re.search(r"\d", password):
        errors.append("Password must contain at least one digit")

    if not re.search(r"[^A-Za-z0-9]", password):
        errors.append("Password must contain at least one special character")

    return len(errors) == 0, errors


def validate_phone(phone: str) -> bool:
    """Validate phone number (E.164-like)."""
    return bool(PHONE_PATTERN.match(phone))


def validate_url(url: str) -> bool:
    """Validate http(s) URL format."""
    return bool(URL_PATTERN.match(url))
