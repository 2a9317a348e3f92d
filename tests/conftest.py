"""
Pytest configuration and fixtures.
Provides test database, client, and common test utilities.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DISABLE_BOOTSTRAP_USERS", "true")

from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.db.session import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User, UserRole  # noqa: E402
from app.repositories.user_repository import SQLModelUserRepository  # noqa: E402
from app.schemas.user import UserCreate  # noqa: E402
from app.services.user_service import UserService  # noqa: E402

USER_PASSWORD = "Userpass123!"
ADMIN_PASSWORD = "Adminpass123!"


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="service")
def service_fixture(session: Session) -> UserService:
    """User service over the test session."""
    return UserService(SQLModelUserRepository(session))


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(service: UserService) -> User:
    """
    Create an ordinary user.
    """
    return service.create(
        UserCreate(email="test@example.com", name="Test User", password=USER_PASSWORD)
    )


@pytest.fixture(name="other_user")
def other_user_fixture(service: UserService) -> User:
    """
    Create a second ordinary user.
    """
    return service.create(
        UserCreate(email="other@example.com", name="Other User", password=USER_PASSWORD)
    )


@pytest.fixture(name="test_admin")
def test_admin_fixture(service: UserService) -> User:
    """
    Create an administrator.
    """
    return service.create(
        UserCreate(
            email="admin@example.com",
            name="Admin User",
            password=ADMIN_PASSWORD,
            role=UserRole.ADMINISTRATOR,
        )
    )


def _login(client: TestClient, email: str, password: str) -> str:
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/login",
        data={"username": email, "password": password},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture(name="user_token")
def user_token_fixture(client: TestClient, test_user: User) -> str:
    """
    Get an access token for the ordinary user.
    """
    return _login(client, test_user.email, USER_PASSWORD)


@pytest.fixture(name="admin_token")
def admin_token_fixture(client: TestClient, test_admin: User) -> str:
    """
    Get an access token for the administrator.
    """
    return _login(client, test_admin.email, ADMIN_PASSWORD)
