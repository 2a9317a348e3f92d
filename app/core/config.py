"""
Application configuration management using Pydantic Settings.
All settings can be overridden via environment variables.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "User Directory Service"
    VERSION: str = "0.1.0"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Database
    DATABASE_URL: str | None = None  # e.g. sqlite:///./data/users.db
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None

    # CORS, comma separated (e.g. "http://localhost:3000,https://app.example.com")
    BACKEND_CORS_ORIGINS: str = ""

    # First administrator, created on startup only when a password is configured
    DISABLE_BOOTSTRAP_USERS: bool = False
    FIRST_ADMIN_EMAIL: str = "admin@example.com"
    FIRST_ADMIN_NAME: str = "Administrator"
    FIRST_ADMIN_PASSWORD: str | None = None

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        Resolve the database URI.

        ``DATABASE_URL`` wins; otherwise a Postgres URL is assembled from the
        ``POSTGRES_*`` parts (credentials escaped by SQLAlchemy), falling back
        to a local SQLite file.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        parts = (self.POSTGRES_SERVER, self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_DB)
        if not all(parts):
            return "sqlite:///./users.db"

        url = URL.create(
            "postgresql",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            database=self.POSTGRES_DB,
        )
        return url.render_as_string(hide_password=False)

    @property
    def cors_origins(self) -> List[str]:
        """Configured CORS origins without trailing slashes."""
        return [
            origin.strip().rstrip("/")
            for origin in self.BACKEND_CORS_ORIGINS.split(",")
            if origin.strip()
        ]


settings = Settings()  # type: ignore
