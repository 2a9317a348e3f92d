"""
Record store for users.

``UserRepository`` is what the user service depends on; the SQLModel
implementation backs it with a relational table carrying a unique index on
email, which is the final authority on uniqueness.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.logging import get_logger
from app.models.user import MAX_USER_ID, User

logger = get_logger(__name__)


class UserRepository(ABC):
    """Abstract persistence interface for user records."""

    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        """Return the user with ``user_id`` or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Return the user whose email matches exactly, or None."""

    @abstractmethod
    def list_all(self) -> List[User]:
        """Return every user."""

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert or update ``user`` and return the stored record."""

    @abstractmethod
    def delete(self, user: User) -> None:
        """Remove ``user`` permanently."""


class SQLModelUserRepository(UserRepository):
    """``UserRepository`` backed by a SQLModel session."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> Optional[User]:
        # Ids outside the column range cannot exist and would overflow the driver
        if not 1 <= user_id <= MAX_USER_ID:
            return None
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def list_all(self) -> List[User]:
        statement = select(User).order_by(User.id)
        return list(self.session.exec(statement).all())

    def save(self, user: User) -> User:
        """
        Commit ``user`` in a single transaction.

        Raises:
            IntegrityError: If a constraint (such as the unique email
                index) rejects the write. The session is rolled back first.
        """
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            logger.warning("User write rejected by a database constraint")
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.session.delete(user)
        self.session.commit()
