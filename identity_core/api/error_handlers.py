"""Error Handlers — the request boundary where errors become status codes.

Invariants:
    - Every response body for a failure is {name, message, action, status_code}
    - IdentityCoreError → its own status and envelope when its kind passes through,
      otherwise a generic InternalServerError (500)
    - RequestValidationError → ValidationError (400) naming the offending fields
    - Router misses: unsupported method on a known path → MethodNotAllowedError (405),
      unknown path → NotFoundError (404), not 405
    - Exception (catch-all) → InternalServerError; the cause is logged, never returned

Design Decisions:
    - Four-layer handler: domain, request validation, router misses, catch-all
    - This module is the only place that logs unexpected failures
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from identity_core.core.errors import (
    IdentityCoreError,
    MethodNotAllowedError,
    NotFoundError,
    ValidationError,
    normalize_error,
    to_error_response,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_router_miss_handler(app)
    _register_generic_error_handler(app)


def _render(exc: BaseException) -> JSONResponse:
    status_code, body = to_error_response(exc)
    return JSONResponse(status_code=status_code, content=body)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register identity-core domain/infrastructure error handler."""

    @app.exception_handler(IdentityCoreError)
    async def domain_error_handler(request: Request, exc: IdentityCoreError):
        error = normalize_error(exc)
        if error.status_code >= 500:
            logger.error(
                f"{exc.name}: {exc.message}",
                exc_info=exc.cause or exc,
                extra={"error_name": exc.name, "path": request.url.path},
            )
        else:
            logger.info(
                f"{error.name}: {error.message}",
                extra={"error_name": error.name, "path": request.url.path},
            )
        return _render(error)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.info(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_name": "ValidationError", "path": request.url.path},
        )
        return _render(_build_validation_error(exc))


def _register_router_miss_handler(app: FastAPI) -> None:
    """Register handler for 404/405 raised by the router itself."""

    @app.exception_handler(StarletteHTTPException)
    async def router_miss_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == 405:
            return _render(MethodNotAllowedError())
        if exc.status_code == 404:
            return _render(NotFoundError())
        if exc.status_code == 400:
            return _render(ValidationError(message=str(exc.detail)))
        logger.error(
            f"Unexpected HTTP {exc.status_code} on {request.url.path}: {exc.detail}",
            extra={"method": request.method, "path": request.url.path},
        )
        return _render(exc)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all. Internal details stay in the log."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=exc,
            extra={"error_name": "InternalServerError", "path": request.url.path},
        )
        return _render(exc)


def _build_validation_error(exc: RequestValidationError) -> ValidationError:
    """Collapse Pydantic's error list into one envelope."""
    fields = sorted({
        ".".join(str(loc) for loc in e["loc"] if loc != "body") or "body"
        for e in exc.errors()
    })
    return ValidationError(
        message="Invalid request data.",
        action=f"Please check the following fields: {', '.join(fields)}.",
    )
