"""
User schemas for API request/response validation.

Shape and format rules (email syntax, name length, password complexity) are
enforced here, before the user service is called.
"""

import re
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints, field_validator

from app.models.user import UserRole

PASSWORD_SPECIAL_CHARACTERS = "@#$%^&+=!"
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72  # bcrypt limit

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

_PASSWORD_RULES = (
    (re.compile(r"[0-9]"), "a digit"),
    (re.compile(r"[a-z]"), "a lower-case letter"),
    (re.compile(r"[A-Z]"), "an upper-case letter"),
    (re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]"), f"one of {PASSWORD_SPECIAL_CHARACTERS}"),
)


def check_password_strength(password: str) -> str:
    """
    Validate a plaintext password against the complexity policy.

    Raises:
        ValueError: Naming the first rule the password breaks
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_BYTES} bytes.")
    if any(ch.isspace() for ch in password):
        raise ValueError("Password must not contain whitespace.")
    for pattern, description in _PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(f"Password must contain {description}.")
    return password


class UserBase(BaseModel):
    """Identity fields supplied when creating an account."""

    email: EmailStr
    name: Name


class UserCreate(UserBase):
    """Schema for creating an account. ``role`` defaults to ordinary when omitted."""

    password: str
    role: Optional[UserRole] = None

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class UserUpdate(BaseModel):
    """
    Partial update payload.

    Omitted fields are left unchanged. ``name`` and ``email`` cannot be
    cleared, so an explicit null for either is rejected. ``role`` is
    accepted for compatibility with older clients but never applied, and
    passwords cannot be changed through this schema.
    """

    name: Optional[Name] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None

    @field_validator("name", "email")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Field may be omitted but cannot be null.")
        return v


class UserResponse(BaseModel):
    """
    User data returned by the API.
    The password hash is never part of a response.
    """

    id: int
    email: str
    name: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
