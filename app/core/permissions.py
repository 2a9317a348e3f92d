"""
Authorization decisions for user management.

These functions take the calling principal explicitly, so they can be tested
without any request or token machinery.
"""

from dataclasses import dataclass

from app.models.user import User, UserRole


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    id: int
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMINISTRATOR

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, email=user.email, role=user.role)  # type: ignore[arg-type]


def can_modify_user(principal: Principal, user_id: int) -> bool:
    """Administrators may update anyone; everyone else only themselves."""
    return principal.is_admin or principal.id == user_id


def can_delete_user(principal: Principal, email: str) -> bool:
    """Administrators may delete anyone; everyone else only their own email."""
    return principal.is_admin or principal.email == email


def can_assign_role(principal: Principal | None, role: UserRole | None) -> bool:
    """
    Decide whether a new account may be created with ``role``.

    Ordinary accounts are open to anonymous sign-up. Granting the
    administrator role is itself an administrative action.
    """
    if role is None or role == UserRole.ORDINARY:
        return True
    return principal is not None and principal.is_admin
