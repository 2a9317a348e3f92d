"""
User routes: account creation, lookup, update and deletion.

Routes decide authorization using the explicit principal and then delegate
to ``UserService``; service failures are turned into responses by the
handlers in ``app.api.errors``.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from pydantic import EmailStr

from app.api.deps import (
    get_current_principal,
    get_current_user,
    get_optional_principal,
    get_user_service,
)
from app.core.logging import get_logger
from app.core.permissions import Principal, can_assign_role, can_delete_user, can_modify_user
from app.models.user import MAX_USER_ID, User
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

ServiceDep = Annotated[UserService, Depends(get_user_service)]
EmailQuery = Annotated[EmailStr, Query(description="Email address of the user")]
UserIdPath = Annotated[int, Path(ge=1, le=MAX_USER_ID, description="ID of the user")]


def _forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: UserCreate,
    service: ServiceDep,
    principal: Annotated[Optional[Principal], Depends(get_optional_principal)],
) -> UserResponse:
    """
    Create a new user.

    Anyone may create an ordinary account. Creating an administrator
    requires an administrator's token.

    Raises:
        HTTPException: 403 if the caller may not grant the requested role
    """
    if not can_assign_role(principal, user_in.role):
        logger.warning(f"Role {user_in.role} requested without admin rights for {user_in.email}")
        raise _forbidden()

    user = service.create(user_in)
    return UserResponse.model_validate(user)


@router.get("", response_model=List[UserResponse])
def list_users(service: ServiceDep) -> List[UserResponse]:
    """List every registered user."""
    return [UserResponse.model_validate(user) for user in service.list_all()]


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Get the authenticated caller's own profile."""
    return UserResponse.model_validate(current_user)


@router.get("/email", response_model=UserResponse)
def get_user_by_email(email: EmailQuery, service: ServiceDep) -> UserResponse:
    """Look a user up by exact email."""
    return UserResponse.model_validate(service.get_by_email(email))


@router.delete("/email", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_by_email(
    email: EmailQuery,
    service: ServiceDep,
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Response:
    """
    Permanently delete a user.
    Only administrators or the account owner may do this.
    """
    if not can_delete_user(principal, email):
        logger.warning(f"User {principal.id} attempted to delete {email}")
        raise _forbidden()

    service.delete_by_email(email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UserIdPath, service: ServiceDep) -> UserResponse:
    """Get a user by ID."""
    return UserResponse.model_validate(service.get_by_id(user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UserIdPath,
    patch: UserUpdate,
    service: ServiceDep,
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> UserResponse:
    """
    Partially update a user's name and/or email.

    Omitted fields keep their values; ``role`` is ignored and the password
    cannot be changed here. Only administrators or the account owner may
    update.
    """
    if not can_modify_user(principal, user_id):
        logger.warning(f"User {principal.id} attempted to update user {user_id}")
        raise _forbidden()

    if patch.role is not None:
        logger.info(f"Ignoring role in update payload for user {user_id}")
    return UserResponse.model_validate(service.update_by_id(user_id, patch))
