"""
Tests for request schema validation.
"""

import pytest
from pydantic import ValidationError

from app.models.user import UserRole
from app.schemas.user import UserCreate, UserUpdate, check_password_strength


@pytest.mark.parametrize(
    "password",
    ["Sh0rt!", "nouppercase1!", "NOLOWERCASE1!", "NoDigits!!", "NoSpecial12", "Has Space1!"],
)
def test_weak_passwords_rejected(password: str) -> None:
    with pytest.raises(ValueError):
        check_password_strength(password)


def test_password_byte_limit() -> None:
    with pytest.raises(ValueError):
        check_password_strength("Aa1!" + "x" * 70)


def test_strong_password_accepted() -> None:
    assert check_password_strength("MyPassword123!") == "MyPassword123!"


def test_user_create_defaults() -> None:
    user_in = UserCreate(email="a@x.com", name=" Alice ", password="Secret123!")
    assert user_in.email == "a@x.com"
    assert user_in.name == "Alice"
    assert user_in.role is None


def test_user_create_blank_name_rejected() -> None:
    with pytest.raises(ValidationError):
        UserCreate(email="a@x.com", name="   ", password="Secret123!")


def test_user_update_tracks_sent_fields() -> None:
    patch = UserUpdate.model_validate({"name": "New"})
    assert patch.model_fields_set == {"name"}
    assert patch.email is None


def test_user_update_rejects_null() -> None:
    with pytest.raises(ValidationError):
        UserUpdate.model_validate({"email": None})


def test_user_update_ignores_password() -> None:
    patch = UserUpdate.model_validate({"password": "Other123!", "role": "administrator"})
    assert not hasattr(patch, "password")
    assert patch.role == UserRole.ADMINISTRATOR
