"""
User model with role-based access control.
"""

from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

# Largest id a 32-bit INTEGER primary key can hold
MAX_USER_ID = 2**31 - 1


class UserRole(str, Enum):
    """Closed set of account roles."""

    ORDINARY = "ordinary"
    ADMINISTRATOR = "administrator"


class User(SQLModel, table=True):
    """
    A user account.

    Attributes:
        id: Surrogate primary key, assigned by the database
        email: Unique email address (also the login name)
        name: Display name
        hashed_password: Password hash, never the plaintext
        role: Account role, ``ordinary`` unless set otherwise
    """

    __tablename__ = "users"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)
    hashed_password: str
    role: UserRole = Field(default=UserRole.ORDINARY)
