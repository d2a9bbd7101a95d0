"""Error handling middleware."""

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roster_admin.config import settings
from roster_admin.core.exceptions import AppException, UnauthorizedException
from roster_admin.services.auth_service import AuthService

logger = structlog.get_logger()

HTTP_ERROR_NAMES = {
    status.HTTP_404_NOT_FOUND: "NotFoundException",
    status.HTTP_405_METHOD_NOT_ALLOWED: "MethodNotAllowedException",
}


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: object,
) -> JSONResponse:
    """Build the JSON error envelope shared by all handlers."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "path": request.url.path,
            **extra,
        },
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle custom application exceptions.

    Args:
        request: Request object
        exc: Application exception

    Returns:
        JSON error response
    """
    return error_response(request, exc.status_code, exc.__class__.__name__, exc.message)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """
    Handle routing-level HTTP exceptions such as unknown paths or wrong verbs.

    Args:
        request: Request object
        exc: HTTP exception

    Returns:
        JSON error response
    """
    return error_response(
        request,
        exc.status_code,
        HTTP_ERROR_NAMES.get(exc.status_code, "HTTPException"),
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle request validation errors as malformed input (400).

    FastAPI parses the body before it resolves dependencies, so the session
    is checked here too and callers without one get the standard 401. A
    login body that cannot be read as
    credentials is reported as missing credentials.

    Args:
        request: Request object
        exc: Validation exception

    Returns:
        JSON error response with field locations
    """
    if request.url.path == f"{settings.api_v1_prefix}/auth/login":
        return error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "ValidationException",
            "Missing credentials",
        )

    token = request.cookies.get(settings.session_cookie_name)
    if AuthService().validate_session_token(token) is None:
        unauthorized = UnauthorizedException()
        return error_response(
            request,
            unauthorized.status_code,
            unauthorized.__class__.__name__,
            unauthorized.message,
        )

    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "ValidationException",
        "Request validation failed",
        details=details,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions without leaking internals.

    Args:
        request: Request object
        exc: Exception

    Returns:
        JSON error response
    """
    logger.error(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "An unexpected error occurred",
    )
