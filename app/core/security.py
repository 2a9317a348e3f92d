"""
Password hashing and JWT helpers.

New hashes use ``pbkdf2_sha256``; ``bcrypt`` hashes are still verified so
accounts imported from older deployments keep working.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from app.core.config import settings


class PasswordHasher:
    """
    One-way password hashing capability.

    Both hashing and equality checks live here; callers never compare
    plaintext against stored values themselves.
    """

    def __init__(self, context: CryptContext | None = None):
        self.context = context or CryptContext(
            schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto"
        )

    def hash(self, plain_password: str) -> str:
        """Return a salted hash of ``plain_password``."""
        return self.context.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Check ``plain_password`` against a stored hash."""
        return self.context.verify(plain_password, hashed_password)


password_hasher = PasswordHasher()


def create_access_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT access token.

    Args:
        subject: The subject (the user ID) to encode in the token
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"exp": datetime.now(timezone.utc) + lifetime, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a JWT access token.

    Raises:
        jose.JWTError: If the signature is invalid or the token expired
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
