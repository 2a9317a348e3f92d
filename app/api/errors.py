"""
Exception handlers translating service failures into HTTP responses.

Every error body has the same shape:
``{"timestamp", "status", "error", "message", "path"}``.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import DuplicateEmailError, UserNotFoundError
from app.core.logging import get_logger

logger = get_logger(__name__)


def error_body(request: Request, status_code: int, error: str, message: str) -> Dict[str, Any]:
    """Build the common error payload."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "error": error,
        "message": message,
        "path": request.url.path,
    }


async def user_not_found_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    logger.info(f"Not found: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_body(request, status.HTTP_404_NOT_FOUND, "Not Found", exc.message),
    )


async def duplicate_email_handler(request: Request, exc: DuplicateEmailError) -> JSONResponse:
    logger.info(f"Conflict: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body(request, status.HTTP_409_CONFLICT, "Conflict", exc.message),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report shape/format violations as 400 with one message per field.
    Covers bad bodies as well as malformed path or query parameters.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))

    logger.info(f"Validation failed on {request.url.path}: {sorted(errors)}")
    body = error_body(request, status.HTTP_400_BAD_REQUEST, "Bad Request", "Request validation failed.")
    body["errors"] = errors
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the service error handlers to ``app``."""
    app.add_exception_handler(UserNotFoundError, user_not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicateEmailError, duplicate_email_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
