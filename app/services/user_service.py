"""
User service layer implementing the business rules for user accounts.

Uniqueness of email, password hashing, default roles and partial updates are
decided here. The service knows nothing about HTTP or about who is calling;
authorization happens before it is invoked.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateEmailError, UserNotFoundError
from app.core.logging import get_logger
from app.core.security import PasswordHasher, password_hasher
from app.models.user import User, UserRole
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)

# Fields a partial update may change. Password and role are excluded.
UPDATABLE_FIELDS = frozenset({"name", "email"})


def merge_patch(current: User, patch: UserUpdate) -> Dict[str, Any]:
    """
    Compute the changes ``patch`` makes to ``current``.

    Only fields the client actually sent are considered. Fields outside
    ``UPDATABLE_FIELDS`` are dropped, and an email equal to the current one
    is not a change.

    Args:
        current: The stored user
        patch: Partial update payload

    Returns:
        Mapping of field name to new value; empty when nothing changes
    """
    requested = patch.model_dump(exclude_unset=True, include=set(UPDATABLE_FIELDS))
    return {
        field: value
        for field, value in requested.items()
        if value is not None and value != getattr(current, field)
    }


class UserService:
    """
    Service for user accounts.

    Args:
        repository: Record store holding the users
        hasher: Password hashing capability
    """

    def __init__(self, repository: UserRepository, hasher: PasswordHasher = password_hasher):
        self.repository = repository
        self.hasher = hasher

    def create(self, candidate: UserCreate) -> User:
        """
        Create a user with a hashed password.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        logger.info(f"Creating user with email {candidate.email}")
        if self.repository.get_by_email(candidate.email) is not None:
            logger.warning(f"Email already registered: {candidate.email}")
            raise DuplicateEmailError(candidate.email)

        user = User(
            email=candidate.email,
            name=candidate.name,
            hashed_password=self.hasher.hash(candidate.password),
            role=candidate.role or UserRole.ORDINARY,
        )
        user = self._save(user, candidate.email)
        logger.info(f"User created: {user.email} (ID: {user.id})")
        return user

    def list_all(self) -> List[User]:
        """Return every user."""
        users = self.repository.list_all()
        logger.info(f"Listing {len(users)} users")
        return users

    def get_by_id(self, user_id: int) -> User:
        """
        Retrieve a user by ID.

        Raises:
            UserNotFoundError: If no user has that ID
        """
        user = self.repository.get(user_id)
        if user is None:
            raise UserNotFoundError.for_id(user_id)
        return user

    def get_by_email(self, email: str) -> User:
        """
        Retrieve a user by exact email.

        Raises:
            UserNotFoundError: If no user has that email
        """
        user = self.repository.get_by_email(email)
        if user is None:
            raise UserNotFoundError.for_email(email)
        return user

    def delete_by_email(self, email: str) -> None:
        """
        Permanently delete the user with ``email``.

        Raises:
            UserNotFoundError: If no user has that email, including when it
                was deleted by an earlier call
        """
        user = self.get_by_email(email)
        user_id = user.id
        self.repository.delete(user)
        logger.info(f"User deleted: {email} (ID: {user_id})")

    def update_by_id(self, user_id: int, patch: UserUpdate) -> User:
        """
        Apply a partial update to the user with ``user_id``.

        Every check runs before any field is touched, so a rejected patch
        leaves the stored user exactly as it was.

        Raises:
            UserNotFoundError: If no user has that ID
            DuplicateEmailError: If the new email belongs to another user
        """
        user = self.get_by_id(user_id)
        changes = merge_patch(user, patch)
        if not changes:
            logger.info(f"No changes for user {user_id}")
            return user

        new_email: Optional[str] = changes.get("email")
        if new_email is not None:
            owner = self.repository.get_by_email(new_email)
            if owner is not None and owner.id != user.id:
                logger.warning(f"Email already registered: {new_email}")
                raise DuplicateEmailError(new_email)

        user.sqlmodel_update(changes)
        user = self._save(user, new_email)
        logger.info(f"User {user_id} updated fields: {sorted(changes)}")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Check login credentials.

        Returns:
            The user if the password matches, None otherwise
        """
        user = self.repository.get_by_email(email)
        if user is None:
            return None
        if not self.hasher.verify(password, user.hashed_password):
            return None
        return user

    def _save(self, user: User, email: Optional[str]) -> User:
        """
        Persist ``user``, turning a unique-index violation on ``email`` into
        ``DuplicateEmailError``.

        A concurrent writer can claim the email between the pre-check and the
        write; the database index catches it and this converts it.
        """
        try:
            return self.repository.save(user)
        except IntegrityError:
            if email is not None and self.repository.get_by_email(email) is not None:
                logger.warning(f"Concurrent registration of email {email}")
                raise DuplicateEmailError(email)
            raise
