"""
Typed failures raised by the user service.

The HTTP layer maps each class to a status code (see ``app.api.errors``);
anything else escaping the service is an internal error.
"""


class UserServiceError(Exception):
    """Base class for business-rule failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserNotFoundError(UserServiceError):
    """No user matches the given id or email."""

    @classmethod
    def for_id(cls, user_id: int) -> "UserNotFoundError":
        return cls(f"User with id {user_id} not found.")

    @classmethod
    def for_email(cls, email: str) -> "UserNotFoundError":
        return cls(f"User with email '{email}' not found.")


class DuplicateEmailError(UserServiceError):
    """A write would give two users the same email."""

    def __init__(self, email: str):
        super().__init__(f"Email '{email}' is already registered.")
        self.email = email
