"""
Database engine and session management using SQLModel.
"""

from typing import Generator

from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings


def build_engine(database_uri: str) -> Engine:
    """Create an engine tuned for SQLite or a pooled server database."""
    if make_url(database_uri).get_backend_name() == "sqlite":
        return create_engine(
            database_uri,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
        )
    # pool_pre_ping discards connections the server has dropped
    return create_engine(
        database_uri,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)


def init_db(bind: Engine = engine) -> None:
    """Create all tables (the unique email index included)."""
    # Register the table models on SQLModel.metadata
    from app.models import user as _user_models  # noqa: F401

    SQLModel.metadata.create_all(bind)


def get_session() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Yields:
        Database session instance
    """
    with Session(engine) as session:
        yield session
