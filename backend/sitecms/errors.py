"""Domain exceptions and the handlers that turn them into JSON error responses."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class SiteError(Exception):
    """Base exception for the site backend"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(SiteError):
    status_code = 400
    default_message = "Validation failed"


class InvalidVersionIndex(ValidationFailed):
    default_message = "Invalid version index"


class Unauthorized(SiteError):
    status_code = 401
    default_message = "Authentication required."


class TokenMalformed(Unauthorized):
    default_message = "Invalid token."


class TokenExpired(Unauthorized):
    default_message = "Token expired."


class TokenInvalidSignature(Unauthorized):
    default_message = "Invalid token."


class Forbidden(SiteError):
    status_code = 403
    default_message = "Access denied."


class NotFound(SiteError):
    status_code = 404
    default_message = "Not found"


class Conflict(SiteError):
    status_code = 409
    default_message = "Conflict"


class DuplicateEmail(Conflict):
    default_message = "User with this email already exists"


class DuplicateKey(Conflict):
    default_message = "Content with this key already exists"


class Locked(SiteError):
    status_code = 423
    default_message = "Account is temporarily locked due to too many failed login attempts"


def _validation_details(exc: RequestValidationError) -> list[dict]:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return details


def register_exception_handlers(app: FastAPI, *, expose_internal_errors: bool) -> None:
    @app.exception_handler(SiteError)
    async def handle_site_error(request: Request, exc: SiteError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": _validation_details(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("[error] unhandled exception on %s %s", request.method, request.url.path)
        message = str(exc) if expose_internal_errors else "Internal server error"
        return JSONResponse(status_code=500, content={"error": message})
