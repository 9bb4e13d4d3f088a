"""Global error handling to map domain errors and prevent information disclosure."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hr_api.config import get_settings
from hr_api.exceptions import (
    ConflictError,
    ForbiddenError,
    HRAPIError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Domain error kinds and their HTTP status, most specific first
DOMAIN_ERROR_STATUS: tuple[tuple[type[HRAPIError], int], ...] = (
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    429: "Too many requests",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}

# Error codes for plain HTTP errors
HTTP_ERROR_CODES = {
    401: "unauthenticated",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
    422: "validation_error",
    429: "rate_limited",
}

# Error messages that are safe to pass through
ALLOWED_ERROR_PATTERNS = [
    "Invalid credentials",
    "Authentication required",
    "Access denied",
    "Resource not found",
    "Not Found",
    "Method Not Allowed",
    "Invalid or expired token",
]


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run outside the CORS middleware, so error responses
    carry the headers themselves.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


def status_for_domain_error(exc: HRAPIError) -> int:
    """Get the HTTP status code for a domain error."""
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users.

    Args:
        message: Error message to check

    Returns:
        True if message is safe to expose
    """
    message_lower = message.lower()
    return any(pattern.lower() in message_lower for pattern in ALLOWED_ERROR_PATTERNS)


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Sanitize error detail to prevent information disclosure.

    Args:
        detail: Original error detail
        status_code: HTTP status code

    Returns:
        Safe error message
    """
    if isinstance(detail, str):
        if is_safe_error_message(detail):
            return detail
    elif isinstance(detail, list | tuple):
        # Validation errors - keep field names and messages only
        safe_errors = []
        for error in detail:
            if isinstance(error, dict):
                loc = error.get("loc", [])
                msg = error.get("msg", "Invalid value")
                field = loc[-1] if loc else "field"
                if isinstance(field, str) and not field.startswith("_"):
                    safe_errors.append(f"{field}: {msg}")
        if safe_errors:
            return "; ".join(safe_errors[:3])

    return SAFE_ERROR_MESSAGES.get(status_code, "Request failed")


async def domain_exception_handler(request: Request, exc: HRAPIError) -> JSONResponse:
    """Render a domain error as ``{"detail", "code"}`` with its status code.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the error message and code
    """
    status_code = status_for_domain_error(exc)
    if status_code == status.HTTP_403_FORBIDDEN:
        logger.warning("Denied %s %s: %s", request.method, request.url.path, exc.details)

    content: dict[str, Any] = {"detail": exc.message, "code": exc.code}
    if get_settings().debug and exc.details:
        content["details"] = exc.details

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=_get_cors_headers(request),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    settings = get_settings()
    detail = exc.detail if settings.debug else sanitize_error_detail(exc.detail, exc.status_code)

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail, "code": HTTP_ERROR_CODES.get(exc.status_code, "error")},
        headers={**(exc.headers or {}), **_get_cors_headers(request)},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with sanitized messages.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with sanitized error
    """
    settings = get_settings()
    logger.warning("Validation error for %s %s", request.method, request.url.path)

    detail: Any = (
        exc.errors()
        if settings.debug
        else sanitize_error_detail(exc.errors(), status.HTTP_422_UNPROCESSABLE_ENTITY)
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail, "code": "validation_error"},
        headers=_get_cors_headers(request),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    cors_headers = _get_cors_headers(request)

    if isinstance(exc, IntegrityError):
        message = str(exc).lower()
        if "unique" in message or "duplicate" in message:
            logger.warning("Unhandled unique violation for %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={"detail": "Resource already exists", "code": "conflict"},
                headers=cors_headers,
            )

    logger.error("Database error for %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred", "code": "error"},
        headers=cors_headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    settings = get_settings()
    logger.error("Unhandled exception for %s %s", request.method, request.url.path, exc_info=exc)

    content: dict[str, Any] = {"detail": SAFE_ERROR_MESSAGES[500], "code": "error"}
    if settings.debug:
        content = {"detail": str(exc), "code": "error", "type": type(exc).__name__}

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_get_cors_headers(request),
    )
