"""
API dependencies for FastAPI dependency injection.
Provides the user service and the authenticated principal to routes.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlmodel import Session

from app.core.config import settings
from app.core.exceptions import UserNotFoundError
from app.core.logging import get_logger
from app.core.permissions import Principal
from app.core.security import decode_access_token
from app.db.session import get_session
from app.models.user import User
from app.repositories.user_repository import SQLModelUserRepository
from app.schemas.auth import TokenPayload
from app.services.user_service import UserService

logger = get_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_PREFIX}/auth/login", auto_error=False
)


def get_user_service(session: Annotated[Session, Depends(get_session)]) -> UserService:
    """Build a user service over the request's database session."""
    return UserService(SQLModelUserRepository(session))


def _resolve_user(service: UserService, token: str) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        token_data = TokenPayload(**decode_access_token(token))
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise credentials_exception
    except ValidationError:
        logger.warning("Invalid user ID in token")
        raise credentials_exception
    if token_data.sub is None:
        logger.warning("Token missing subject claim")
        raise credentials_exception

    try:
        return service.get_by_id(token_data.sub)
    except UserNotFoundError:
        logger.warning(f"Token subject {token_data.sub} no longer exists")
        raise credentials_exception


def get_current_user(
    service: Annotated[UserService, Depends(get_user_service)],
    token: Annotated[str, Depends(oauth2_scheme)],
) -> User:
    """
    Dependency to get the current authenticated user from a JWT token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or stale
    """
    return _resolve_user(service, token)


def get_current_principal(
    current_user: Annotated[User, Depends(get_current_user)],
) -> Principal:
    """The authenticated caller as a plain authorization context."""
    return Principal.from_user(current_user)


def get_optional_principal(
    service: Annotated[UserService, Depends(get_user_service)],
    token: Annotated[Optional[str], Depends(optional_oauth2_scheme)],
) -> Optional[Principal]:
    """
    Like ``get_current_principal`` but anonymous callers get None.
    A token that is sent but invalid is still rejected with 401.
    """
    if token is None:
        return None
    return Principal.from_user(_resolve_user(service, token))
