"""
Schemas for bearer-token authentication.
"""

from typing import Optional

from pydantic import BaseModel


class Token(BaseModel):
    """Access token returned by the login endpoint."""

    access_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    """Claims read back from a decoded access token."""

    sub: Optional[int] = None
    exp: Optional[int] = None
