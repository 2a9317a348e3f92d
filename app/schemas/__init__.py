"""Pydantic schemas for request/response validation."""

from app.schemas.auth import Token, TokenPayload
from app.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = ["Token", "TokenPayload", "UserCreate", "UserResponse", "UserUpdate"]
