"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to JSON error responses of the form {"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsecho.core.config import get_settings
from newsecho.domain.exceptions import NewsEchoException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "IDENTITY_PROVIDER_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "EMAIL_NOT_VERIFIED": 403,
    "ACCOUNT_DISABLED": 403,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "ALREADY_SUBSCRIBED": 409,
    "NOT_SUBSCRIBED": 409,
    "SUBSCRIPTION_COOLDOWN": 409,
    "IMAGE_UPLOAD_ERROR": 502,
    "SERVICE_UNAVAILABLE": 503,
}

# Provider codes that mean "bad credentials" rather than "bad request".
_PROVIDER_UNAUTHORIZED = frozenset(
    {"INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS", "EMAIL_NOT_FOUND", "INVALID_ID_TOKEN"}
)
_PROVIDER_STATUS: dict[str, int] = {
    "USER_DISABLED": 403,
    "EMAIL_EXISTS": 409,
    "TOO_MANY_ATTEMPTS_TRY_LATER": 429,
}


def status_for(exc: NewsEchoException) -> int:
    """HTTP status for a domain exception."""
    if exc.error_code == "IDENTITY_PROVIDER_ERROR":
        code = getattr(exc, "provider_code", None) or ""
        if code in _PROVIDER_UNAUTHORIZED:
            return 401
        return _PROVIDER_STATUS.get(code, 400)
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _newsecho_exception_handler(request: Request, exc: NewsEchoException) -> JSONResponse:
    """Return JSON from NewsEchoException.to_dict() with the mapped status code."""
    status = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: NewsEchoException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(NewsEchoException, _newsecho_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
