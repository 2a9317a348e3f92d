"""
Main FastAPI application entry point.
Configures the application, middleware, routes and error handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from app.api.errors import register_exception_handlers
from app.api.routes import auth, users
from app.core.config import settings
from app.core.exceptions import DuplicateEmailError
from app.core.logging import get_logger, setup_logging
from app.db.session import engine, init_db
from app.models.user import User, UserRole
from app.repositories.user_repository import SQLModelUserRepository
from app.schemas.user import UserCreate
from app.services.user_service import UserService

setup_logging()
logger = get_logger(__name__)


def bootstrap_first_admin(
    session: Session, email: str, name: str, password: Optional[str]
) -> Optional[User]:
    """
    Create the first administrator account if it does not exist yet.

    There is no default password: without one nothing is created.

    Returns:
        The new administrator, or None if skipped or already present
    """
    if not password:
        logger.warning("FIRST_ADMIN_PASSWORD is not set; skipping administrator bootstrap")
        return None

    service = UserService(SQLModelUserRepository(session))
    admin_in = UserCreate(email=email, name=name, password=password, role=UserRole.ADMINISTRATOR)
    try:
        admin = service.create(admin_in)
    except DuplicateEmailError:
        logger.info(f"Administrator {admin_in.email} already exists")
        return None
    logger.info(f"Administrator created: {admin.email}")
    return admin


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Creates tables and the first administrator on startup.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    logger.info("Creating database tables...")
    init_db(engine)

    if settings.DISABLE_BOOTSTRAP_USERS:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")
    else:
        with Session(engine) as session:
            bootstrap_first_admin(
                session,
                email=settings.FIRST_ADMIN_EMAIL,
                name=settings.FIRST_ADMIN_NAME,
                password=settings.FIRST_ADMIN_PASSWORD,
            )

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    lifespan=lifespan,
)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["authorization", "content-type", "accept"],
    )

register_exception_handlers(app)

app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(users.router, prefix=settings.API_V1_PREFIX)
