"""
Authentication routes.
Exchanges email/password credentials for a JWT bearer token.
"""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from app.api.deps import get_user_service
from app.core.logging import get_logger
from app.core.security import create_access_token
from app.schemas.auth import Token
from app.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
def login(
    service: Annotated[UserService, Depends(get_user_service)],
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> Token:
    """
    OAuth2 compatible token login; ``username`` carries the email.

    Raises:
        HTTPException: 401 if the credentials are invalid
    """
    user = None
    try:
        email = validate_email(form_data.username, check_deliverability=False).normalized
    except EmailNotValidError:
        logger.warning("Login attempt with a malformed email")
    else:
        user = service.authenticate(email=email, password=form_data.password)

    if not user:
        logger.warning(f"Failed login attempt for email: {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"User logged in: {user.email} (ID: {user.id})")
    return Token(access_token=create_access_token(subject=user.id))
