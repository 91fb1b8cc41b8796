"""Error Handlers: global exception handlers rendering error envelopes.

Invariants:
    - HelpdeskError -> its own envelope and HTTP status
    - RequestValidationError (path/query typing) -> 400 VALIDATION_ERROR with field details
    - Starlette HTTPException -> envelope; unknown routes become 404 NOT_FOUND
    - Exception (catch-all) -> 500 SERVER_ERROR; traceback attached only outside production

Design Decisions:
    - Four-layer handler registered from one entry point, keeping main.py small
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from helpdesk.config import get_settings
from helpdesk.core import envelope
from helpdesk.core.domain_types import ErrorCode
from helpdesk.core.errors import ErrorSeverity, HelpdeskError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_helpdesk_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_helpdesk_error_handler(app: FastAPI) -> None:

    @app.exception_handler(HelpdeskError)
    async def helpdesk_error_handler(request: Request, exc: HelpdeskError):
        """Handle all Helpdesk domain/infrastructure errors."""
        log = logger.error if exc.severity is ErrorSeverity.CRITICAL else logger.warning
        log(
            f"HelpdeskError: {exc.message}",
            extra={"error_code": exc.code.value, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle FastAPI parameter validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render framework HTTP errors (unknown route, wrong method) as envelopes."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            body = envelope.error(
                ErrorCode.NOT_FOUND,
                f"Route {request.method} {request.url.path} not found",
            )
        else:
            body = envelope.error(_code_for_status(exc.status_code), str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code, content=body, headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: generic message, internals only outside production."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "error_code": ErrorCode.SERVER_ERROR.value},
        )
        details = None
        if not get_settings().is_production:
            details = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__),
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=envelope.error(
                ErrorCode.SERVER_ERROR, "Internal Server Error", details,
            ),
        )


def _code_for_status(status_code: int) -> ErrorCode:
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return ErrorCode.UNAUTHORIZED
    if status_code >= 500:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.BAD_REQUEST


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Field paths drop the leading location segment ("path", "query", "body")."""
    return envelope.error(
        ErrorCode.VALIDATION_ERROR,
        "Validation failed",
        [
            {
                "field": ".".join(str(loc) for loc in e["loc"][1:]) or str(e["loc"][0]),
                "message": e["msg"],
            }
            for e in exc.errors()
        ],
    )
